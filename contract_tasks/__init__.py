"""contract-tasks: 스마트 컨트랙트 워크스페이스의 빌드/스키마 타입 생성 태스크 레지스트리"""

from contract_tasks.registry.task_registry import (
    CompositeDefault,
    NotFoundError,
    TaskDefinition,
    TaskDisabledError,
    TaskRegistry,
)
from contract_tasks.registry.schemas import registry_from_mapping
from contract_tasks.core.executor import Executor, ExecutionPolicy, build_node
from contract_tasks.core.node import ExecutionError
from contract_tasks.scripts import SCRIPTS, get_scripts

__version__ = "0.1.0"

__all__ = [
    "CompositeDefault",
    "NotFoundError",
    "TaskDefinition",
    "TaskDisabledError",
    "TaskRegistry",
    "registry_from_mapping",
    "Executor",
    "ExecutionPolicy",
    "build_node",
    "ExecutionError",
    "SCRIPTS",
    "get_scripts",
]
