"""Core components for running resolved tasks"""

from contract_tasks.core.context import CommandRecord, Context
from contract_tasks.core.executor import ExecutionPolicy, ExecutionResult, Executor, build_node
from contract_tasks.core.node import CommandNode, ExecutionError, Node, Serial

__all__ = [
    "CommandRecord",
    "Context",
    "ExecutionPolicy",
    "ExecutionResult",
    "Executor",
    "build_node",
    "CommandNode",
    "ExecutionError",
    "Node",
    "Serial",
]
