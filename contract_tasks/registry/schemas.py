"""스크립트 매핑 및 json2ts 타깃 검증 유틸리티"""

import logging
import re
from pathlib import PurePosixPath
from typing import Any, Dict, Iterable, List, Optional, Type, Union

from pydantic import BaseModel, Field, ValidationError

from contract_tasks.registry.task_registry import (
    COMPOSITE_RUNNER,
    TaskDefinition,
    TaskRegistry,
    group,
    task,
)

logger = logging.getLogger(__name__)

_JSON2TS_RE = re.compile(
    r"^(?:cd (?P<cwd>\S+) && )?json2ts -i (?P<input>\S+) -o (?P<output>\S+)$"
)
_GLOB_CHARS = set("*?[")


class SchemaValidationError(Exception):
    """스키마 검증 실패 시 발생하는 에러"""
    pass


class ScriptsFile(BaseModel):
    """nps 스크립트 파일 (`{"scripts": {...}}`) 스키마"""
    scripts: Dict[str, Union[str, Dict[str, str]]] = Field(
        ..., description="태스크 이름 -> 커맨드 또는 하위 태스크 매핑"
    )


class Json2TsTarget(BaseModel):
    """json2ts 태스크 하나의 입력 glob / 출력 디렉터리 쌍"""
    task: str
    input_glob: str
    output_dir: str
    cwd: Optional[str] = None

    @property
    def input_root(self) -> PurePosixPath:
        """glob 문자가 나오기 전까지의 입력 디렉터리"""
        parts = []
        for part in PurePosixPath(self.input_glob).parts:
            if _GLOB_CHARS & set(part):
                break
            parts.append(part)
        return PurePosixPath(*parts)

    @property
    def output_path(self) -> PurePosixPath:
        return PurePosixPath(self.output_dir)


def validate_schema(
    data: Dict[str, Any],
    schema: Type[BaseModel],
    error_prefix: str = "Validation error",
) -> BaseModel:
    """
    Pydantic 스키마로 데이터 검증

    Args:
        data: 검증할 데이터
        schema: Pydantic BaseModel 클래스
        error_prefix: 에러 메시지 접두사

    Returns:
        검증된 Pydantic 모델 인스턴스

    Raises:
        SchemaValidationError: 검증 실패 시
    """
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise SchemaValidationError(f"{error_prefix}: {e}") from e


def parse_json2ts_command(task_name: str, command: str) -> Optional[Json2TsTarget]:
    """
    json2ts 커맨드에서 입력 glob 과 출력 디렉터리를 추출합니다.

    json2ts 커맨드가 아니면 None 을 반환합니다.
    """
    match = _JSON2TS_RE.match(command)
    if match is None:
        return None
    return Json2TsTarget(
        task=task_name,
        input_glob=match.group("input"),
        output_dir=match.group("output"),
        cwd=match.group("cwd"),
    )


def _overlaps(a: PurePosixPath, b: PurePosixPath) -> bool:
    return a == b or a in b.parents or b in a.parents


def check_disjoint_targets(targets: Iterable[Json2TsTarget]) -> None:
    """
    두 json2ts 태스크가 같은(또는 포함 관계인) 입력/출력 디렉터리를 쓰지 않는지 검증

    Raises:
        SchemaValidationError: 겹치는 쌍이 있을 때
    """
    seen: List[Json2TsTarget] = []
    for target in targets:
        for other in seen:
            if _overlaps(target.output_path, other.output_path):
                raise SchemaValidationError(
                    f"Tasks '{other.task}' and '{target.task}' write overlapping "
                    f"output directories: {other.output_dir}, {target.output_dir}"
                )
            if _overlaps(target.input_root, other.input_root):
                raise SchemaValidationError(
                    f"Tasks '{other.task}' and '{target.task}' read overlapping "
                    f"inputs: {other.input_glob}, {target.input_glob}"
                )
        seen.append(target)


def infer_tags(command: str) -> List[str]:
    """커맨드의 실행 도구로 태그를 추정"""
    if _JSON2TS_RE.match(command):
        return ["json2ts"]
    tool = command.split(" ", 1)[0]
    return [tool] if tool else []


def _parse_composite(parent: str, command: str) -> Optional[List[str]]:
    """'nps schema.a schema.b' -> ['a', 'b'] (nps 커맨드가 아니면 None)"""
    tokens = command.split()
    if not tokens or tokens[0] != COMPOSITE_RUNNER:
        return None
    names = []
    for token in tokens[1:]:
        prefix, _, name = token.partition(".")
        if prefix != parent or not name:
            raise SchemaValidationError(
                f"Default of '{parent}' must reference its own sub-tasks, got '{token}'"
            )
        names.append(name)
    return names


def _definition_from_value(name: str, value: Union[str, Dict[str, str]]) -> TaskDefinition:
    if isinstance(value, str):
        return task(name, value, tags=infer_tags(value))

    default = value.get("default")
    children = {k: v for k, v in value.items() if k != "default"}

    if not children:
        if default is None:
            raise SchemaValidationError(f"Task '{name}' is empty")
        # nps 의 {default: "..."} 단일 항목은 leaf 커맨드
        return task(name, default, tags=infer_tags(default))

    names = None
    if default is not None:
        names = _parse_composite(name, default)
        if names is None:
            raise SchemaValidationError(
                f"Task '{name}' mixes a plain default command with sub-tasks"
            )

    return group(
        name,
        [task(child, command, tags=infer_tags(command)) for child, command in children.items()],
        default=names,
    )


def registry_from_mapping(data: Dict[str, Any]) -> TaskRegistry:
    """
    nps 스타일 매핑으로부터 TaskRegistry 를 생성합니다.

    Args:
        data: `{"scripts": {"release": {"default": ...}, "schema": {...}}}` 형태

    Returns:
        TaskRegistry

    Raises:
        SchemaValidationError: 매핑 형식이 잘못되었거나 레지스트리 불변식을 어길 때
    """
    parsed = validate_schema(data, ScriptsFile, "Invalid scripts mapping")
    try:
        definitions = [
            _definition_from_value(name, value) for name, value in parsed.scripts.items()
        ]
        registry = TaskRegistry(definitions)
    except ValueError as e:
        raise SchemaValidationError(f"Invalid scripts mapping: {e}") from e

    logger.debug("Loaded %d task(s) from mapping", len(registry.list_tasks()))
    return registry
