"""Executor: 레지스트리의 태스크를 노드 트리로 만들어 순차 실행"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Union

from contract_tasks.core.context import Context
from contract_tasks.core.node import CommandNode, ExecutionError, Node, Serial
from contract_tasks.registry.task_registry import CompositeDefault, TaskRegistry, split_path

logger = logging.getLogger(__name__)


@dataclass
class ExecutionPolicy:
    """실행 정책 설정"""
    dry_run: bool = False  # True 면 커맨드를 기록만 하고 실행하지 않음
    shell: Optional[str] = None  # None 이면 /bin/sh
    env: Dict[str, str] = field(default_factory=dict)

    # 훅 함수들 (옵셔널, CommandNode 마다 호출)
    before_node: Optional[Callable[[Node, Context], None]] = None
    after_node: Optional[Callable[[Node, Context, Optional[Exception]], None]] = None


class ExecutionResult:
    """실행 결과"""

    def __init__(
        self,
        context: Context,
        success: bool,
        duration: float,
        errors: Optional[List[ExecutionError]] = None,
    ):
        self.context = context
        self.success = success
        self.duration = duration
        self.errors = errors or []

    @property
    def exit_code(self) -> int:
        """성공이면 0, 실패면 처음 실패한 커맨드의 종료 코드 (알 수 없으면 1)"""
        if self.success:
            return 0
        for error in self.errors:
            if error.exit_code:
                return error.exit_code
        return 1

    def __repr__(self) -> str:
        return f"ExecutionResult(success={self.success}, exit_code={self.exit_code})"


def build_node(registry: TaskRegistry, path: Union[str, Sequence[str]]) -> Node:
    """
    태스크 경로를 실행 가능한 노드로 변환합니다.

    Args:
        registry: 태스크 레지스트리
        path: 점 표기 문자열 또는 세그먼트 시퀀스

    Returns:
        leaf 태스크면 CommandNode, composite default 면 하위 CommandNode 들의 Serial

    Raises:
        NotFoundError: 경로를 해석할 수 없을 때
    """
    segments = split_path(path)
    dotted = ".".join(segments)
    resolved = registry.resolve(segments)

    if isinstance(resolved, CompositeDefault):
        children = [build_node(registry, segments + (name,)) for name in resolved]
        return Serial(children, name=dotted)
    return CommandNode(resolved, name=dotted)


class Executor:
    """
    노드 실행 엔진.

    composite default 는 선언된 순서대로 하나씩 실행되며, 0 이 아닌 종료 코드가
    나오면 남은 태스크는 실행하지 않습니다. 재시도/타임아웃은 없습니다.
    """

    def __init__(self, policy: Optional[ExecutionPolicy] = None):
        """
        Args:
            policy: 실행 정책 (None이면 기본 정책 사용)
        """
        self.policy = policy or ExecutionPolicy()

    def new_context(self, cwd: Optional[Union[str, Path]] = None) -> Context:
        return Context(
            cwd=Path(cwd) if cwd is not None else Path.cwd(),
            shell=self.policy.shell,
            env=dict(self.policy.env),
            dry_run=self.policy.dry_run,
            policy=self.policy,
        )

    def run(
        self,
        node: Node,
        context: Optional[Context] = None,
        cwd: Optional[Union[str, Path]] = None,
    ) -> ExecutionResult:
        """
        노드를 동기 실행합니다.

        Args:
            node: 실행할 노드
            context: 기존 컨텍스트 (None이면 새로 생성)
            cwd: 새 컨텍스트의 작업 디렉터리 (기본값: 현재 디렉터리)

        Returns:
            ExecutionResult: 실행 결과
        """
        if context is None:
            context = self.new_context(cwd)

        start_time = time.time()
        errors = []

        try:
            node.run(context)
        except ExecutionError as e:
            logger.error("%s", e)
            errors.append(e)

        duration = time.time() - start_time
        return ExecutionResult(
            context=context,
            success=len(errors) == 0,
            duration=duration,
            errors=errors,
        )

    def run_tasks(
        self,
        registry: TaskRegistry,
        paths: Sequence[Union[str, Sequence[str]]],
        cwd: Optional[Union[str, Path]] = None,
    ) -> ExecutionResult:
        """
        여러 태스크 경로를 주어진 순서대로 실행합니다 (`nps a b` 와 동일).

        Raises:
            NotFoundError: 어떤 경로든 해석할 수 없을 때 (아무것도 실행하지 않음)
        """
        nodes = [build_node(registry, path) for path in paths]
        node = nodes[0] if len(nodes) == 1 else Serial(nodes, name="tasks")
        return self.run(node, cwd=cwd)
