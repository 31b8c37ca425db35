"""Context 객체: 실행 중 작업 디렉터리/셸 설정과 실행 기록을 공유"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional

if TYPE_CHECKING:
    from contract_tasks.core.executor import ExecutionPolicy


@dataclass
class CommandRecord:
    """실행(또는 dry-run)된 커맨드 한 건"""
    node_name: str
    command: str
    cwd: Path
    exit_code: Optional[int] = None  # dry-run 이면 None


@dataclass
class Context:
    """
    파이프라인 실행 중 공유되는 컨텍스트.

    커맨드는 항상 `cwd` 에서 시작합니다. 커맨드 안의 `cd ..` 는 그 커맨드의
    셸 안에서만 유효하고 다음 커맨드에 영향을 주지 않습니다.
    """
    cwd: Path = field(default_factory=Path.cwd)
    shell: Optional[str] = None
    env: Dict[str, str] = field(default_factory=dict)
    dry_run: bool = False
    policy: Optional["ExecutionPolicy"] = None
    records: List[CommandRecord] = field(default_factory=list)

    def __post_init__(self):
        self.cwd = Path(self.cwd)

    def environ(self) -> Optional[Dict[str, str]]:
        """부모 환경에 overrides 를 덮은 환경 (overrides 가 없으면 None = 상속)"""
        if not self.env:
            return None
        merged = dict(os.environ)
        merged.update(self.env)
        return merged

    def record(self, node_name: str, command: str, exit_code: Optional[int]) -> CommandRecord:
        entry = CommandRecord(node_name=node_name, command=command, cwd=self.cwd, exit_code=exit_code)
        self.records.append(entry)
        return entry

    @property
    def commands(self) -> List[str]:
        """실행 순서대로의 커맨드 문자열"""
        return [r.command for r in self.records]
