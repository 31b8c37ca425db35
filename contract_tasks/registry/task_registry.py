"""Task Registry: 이름으로 찾는 불변 셸 커맨드 테이블"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

if TYPE_CHECKING:
    from contract_tasks.registry.schemas import Json2TsTarget

logger = logging.getLogger(__name__)

# nps 스타일 composite default 의 실행기 이름
COMPOSITE_RUNNER = "nps"


class NotFoundError(LookupError):
    """태스크 경로를 찾을 수 없을 때 발생하는 에러"""

    def __init__(self, message: str, path: Sequence[str] = ()):
        super().__init__(message)
        self.path = tuple(path)


class TaskDisabledError(NotFoundError):
    """비활성화된 태스크를 실행하려 할 때 발생하는 에러"""
    pass


class DuplicateTaskError(ValueError):
    """같은 레벨에 같은 이름이 두 번 등록될 때 발생하는 에러"""
    pass


class InvalidDefaultError(ValueError):
    """default 가 존재하지 않는 하위 태스크를 가리킬 때 발생하는 에러"""
    pass


@dataclass(frozen=True)
class CompositeDefault:
    """
    부모 태스크를 하위 이름 없이 호출했을 때 순서대로 실행되는 하위 태스크 목록.

    Example:
        CompositeDefault(("create", "transform", "hub"))
        # render("schema") -> "nps schema.create schema.transform schema.hub"
    """
    names: Tuple[str, ...]

    def __post_init__(self):
        if not self.names:
            raise InvalidDefaultError("Composite default must list at least one sub-task")
        object.__setattr__(self, "names", tuple(self.names))

    def render(self, parent: str) -> str:
        """nps 커맨드 문자열로 변환합니다."""
        return " ".join([COMPOSITE_RUNNER] + [f"{parent}.{name}" for name in self.names])

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)


@dataclass(frozen=True)
class TaskDefinition:
    """태스크 명세 (leaf 는 command, group 은 children 을 가짐)"""
    name: str
    command: Optional[str] = None
    children: Mapping[str, "TaskDefinition"] = field(default_factory=dict)
    default: Optional[CompositeDefault] = None
    enabled: bool = True
    description: Optional[str] = None
    tags: Tuple[str, ...] = ()

    def __post_init__(self):
        """구조 검증 후 children 을 읽기 전용으로 고정"""
        if not self.name or "." in self.name:
            raise ValueError(f"Invalid task name '{self.name}'")

        children = dict(self.children)
        if self.command is not None and (children or self.default is not None):
            raise ValueError(f"Task '{self.name}' cannot have both a command and children")
        if self.command is None and not children:
            raise ValueError(f"Task '{self.name}' needs either a command or children")

        if self.default is not None:
            for ref in self.default:
                child = children.get(ref)
                if child is None:
                    raise InvalidDefaultError(
                        f"Default of '{self.name}' references unknown sub-task '{ref}'"
                    )
                if not child.enabled:
                    raise InvalidDefaultError(
                        f"Default of '{self.name}' references disabled sub-task '{ref}'"
                    )

        object.__setattr__(self, "children", MappingProxyType(children))
        object.__setattr__(self, "tags", tuple(self.tags))

    @property
    def is_group(self) -> bool:
        return self.command is None


def task(
    name: str,
    command: str,
    *,
    enabled: bool = True,
    description: Optional[str] = None,
    tags: Iterable[str] = (),
) -> TaskDefinition:
    """leaf 태스크 생성 헬퍼"""
    return TaskDefinition(
        name=name,
        command=command,
        enabled=enabled,
        description=description,
        tags=tuple(tags),
    )


def group(
    name: str,
    children: Iterable[TaskDefinition],
    *,
    default: Optional[Sequence[str]] = None,
    description: Optional[str] = None,
    tags: Iterable[str] = (),
) -> TaskDefinition:
    """
    하위 태스크를 가진 group 태스크를 생성합니다.

    Args:
        name: 태스크 이름
        children: 하위 태스크 (선언 순서 유지)
        default: composite default 로 실행할 하위 태스크 이름들
        description: 설명
        tags: 태그

    Raises:
        DuplicateTaskError: 같은 이름의 하위 태스크가 두 번 나올 때
        InvalidDefaultError: default 가 없는/비활성 하위 태스크를 가리킬 때
    """
    return TaskDefinition(
        name=name,
        children=_index(children, parent=name),
        default=CompositeDefault(tuple(default)) if default is not None else None,
        description=description,
        tags=tuple(tags),
    )


def _index(definitions: Iterable[TaskDefinition], parent: Optional[str] = None) -> Dict[str, TaskDefinition]:
    indexed: Dict[str, TaskDefinition] = {}
    for definition in definitions:
        if definition.name in indexed:
            where = f" under '{parent}'" if parent else ""
            raise DuplicateTaskError(f"Task '{definition.name}' is declared twice{where}")
        indexed[definition.name] = definition
    return indexed


def split_path(path: Union[str, Sequence[str]]) -> Tuple[str, ...]:
    """'schema.hub' 또는 ['schema', 'hub'] 를 세그먼트 튜플로 정규화"""
    if isinstance(path, str):
        segments = tuple(path.split(".")) if path else ()
    else:
        segments = tuple(path)
    if not segments or any(not s for s in segments):
        raise NotFoundError(f"Invalid task path '{'.'.join(segments)}'", segments)
    return segments


Resolution = Union[str, CompositeDefault]


class TaskRegistry:
    """
    태스크 레지스트리: 이름(및 하위 이름)으로 셸 커맨드를 찾습니다.

    한 번 생성되면 변경되지 않으며, 커맨드 문자열을 해석하거나 실행하지 않습니다.

    Example:
        registry = TaskRegistry([
            task("release", "bash build_release.sh"),
            group("schema", [...], default=["create", "transform", "hub"]),
        ])

        registry.resolve("release")          # "bash build_release.sh"
        registry.resolve(["schema"])         # CompositeDefault(("create", ...))
    """

    def __init__(self, definitions: Iterable[TaskDefinition]):
        self._tasks: Mapping[str, TaskDefinition] = MappingProxyType(_index(definitions))
        logger.debug("Task registry built with %d top-level task(s)", len(self._tasks))

    def get(self, path: Union[str, Sequence[str]]) -> TaskDefinition:
        """
        경로에 해당하는 TaskDefinition 을 반환합니다 (비활성 항목 포함).

        Args:
            path: 'schema.hub' 같은 점 표기 문자열 또는 세그먼트 시퀀스

        Returns:
            TaskDefinition

        Raises:
            NotFoundError: 어느 세그먼트든 해당 레벨에 없을 때
        """
        segments = split_path(path)
        level = self._tasks
        definition = None
        for depth, segment in enumerate(segments):
            definition = level.get(segment)
            if definition is None:
                where = ".".join(segments[:depth]) or "<root>"
                available = ", ".join(level.keys()) or "none"
                raise NotFoundError(
                    f"Task '{'.'.join(segments)}' not found: no '{segment}' in {where}. "
                    f"Available: {available}",
                    segments,
                )
            level = definition.children
        return definition

    def resolve(self, path: Union[str, Sequence[str]]) -> Resolution:
        """
        태스크 경로를 커맨드 문자열 또는 composite default 로 해석합니다.

        Args:
            path: 'schema.hub' 같은 점 표기 문자열 또는 세그먼트 시퀀스

        Returns:
            leaf 태스크면 선언된 커맨드 문자열 그대로, group 이면 CompositeDefault

        Raises:
            NotFoundError: 경로를 찾을 수 없거나 default 가 없는 group 일 때
            TaskDisabledError: 비활성화된 태스크일 때
        """
        segments = split_path(path)
        definition = self.get(segments)
        dotted = ".".join(segments)

        if not definition.enabled:
            raise TaskDisabledError(f"Task '{dotted}' is disabled", segments)
        if definition.is_group:
            if definition.default is None:
                raise NotFoundError(
                    f"Task '{dotted}' has no default; pick one of: "
                    + ", ".join(definition.children.keys()),
                    segments,
                )
            return definition.default
        return definition.command

    def walk(self, include_disabled: bool = False) -> Iterator[Tuple[str, TaskDefinition]]:
        """(점 표기 경로, TaskDefinition) 을 선언 순서대로 순회합니다."""
        def _walk(prefix: str, level: Mapping[str, TaskDefinition]):
            for name, definition in level.items():
                if not definition.enabled and not include_disabled:
                    continue
                dotted = f"{prefix}{name}"
                yield dotted, definition
                yield from _walk(f"{dotted}.", definition.children)

        yield from _walk("", self._tasks)

    def list_tasks(self, include_disabled: bool = False) -> List[str]:
        """호출 가능한 모든 태스크 경로 리스트를 반환합니다."""
        return [
            dotted
            for dotted, definition in self.walk(include_disabled)
            if not definition.is_group or definition.default is not None
        ]

    def get_by_tag(self, tag: str) -> List[TaskDefinition]:
        """특정 태그를 가진 활성 태스크를 반환합니다."""
        return [definition for _, definition in self.walk() if tag in definition.tags]

    def json2ts_targets(self) -> List["Json2TsTarget"]:
        """활성 json2ts 태스크들의 (입력 glob, 출력 디렉터리) 쌍을 반환합니다."""
        from contract_tasks.registry.schemas import Json2TsTarget, parse_json2ts_command

        targets: List[Json2TsTarget] = []
        for dotted, definition in self.walk():
            if definition.is_group:
                continue
            target = parse_json2ts_command(dotted, definition.command)
            if target is not None:
                targets.append(target)
        return targets

    def __contains__(self, path) -> bool:
        try:
            self.get(path)
        except NotFoundError:
            return False
        return True

    def __repr__(self) -> str:
        return f"TaskRegistry(tasks={list(self._tasks.keys())})"
