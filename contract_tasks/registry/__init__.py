"""Registry components for task lookup and script-mapping validation"""

from contract_tasks.registry.task_registry import (
    CompositeDefault,
    DuplicateTaskError,
    InvalidDefaultError,
    NotFoundError,
    TaskDefinition,
    TaskDisabledError,
    TaskRegistry,
    group,
    task,
)
from contract_tasks.registry.schemas import (
    Json2TsTarget,
    SchemaValidationError,
    check_disjoint_targets,
    parse_json2ts_command,
    registry_from_mapping,
)

__all__ = [
    "CompositeDefault",
    "DuplicateTaskError",
    "InvalidDefaultError",
    "NotFoundError",
    "TaskDefinition",
    "TaskDisabledError",
    "TaskRegistry",
    "group",
    "task",
    "Json2TsTarget",
    "SchemaValidationError",
    "check_disjoint_targets",
    "parse_json2ts_command",
    "registry_from_mapping",
]
