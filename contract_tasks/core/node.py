"""Node 추상화: 셸 커맨드와 순차(Serial) 실행을 Composite 패턴으로 표현"""

import logging
import subprocess
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from contract_tasks.core.context import Context

logger = logging.getLogger(__name__)


class ExecutionError(Exception):
    """노드 실행 중 발생한 에러"""

    def __init__(
        self,
        message: str,
        node_name: str,
        cause: Optional[Exception] = None,
        command: Optional[str] = None,
        exit_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.node_name = node_name
        self.cause = cause
        self.command = command
        self.exit_code = exit_code


class Node(ABC):
    """
    실행 트리 노드의 기본 추상 클래스.

    모든 노드는 run(context) 메서드를 구현해야 합니다.
    """

    def __init__(self, name: Optional[str] = None, metadata: Optional[Dict[str, Any]] = None):
        """
        Args:
            name: 노드 이름 (보통 점 표기 태스크 경로)
            metadata: 추가 메타데이터
        """
        self.name = name or self.__class__.__name__
        self.metadata = metadata or {}

    @abstractmethod
    def run(self, context: Context) -> None:
        """
        노드를 실행합니다.

        Raises:
            ExecutionError: 실행 중 에러 발생 시
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}')"


class CommandNode(Node):
    """
    셸 커맨드 하나를 실행하는 leaf 노드.

    커맨드 문자열은 해석하지 않고 그대로 셸에 넘기며, 끝날 때까지 블록합니다.
    """

    def __init__(self, command: str, name: Optional[str] = None, **kwargs):
        super().__init__(name=name or command, **kwargs)
        self.command = command

    def run(self, context: Context) -> None:
        policy = context.policy
        if policy is not None and policy.before_node:
            policy.before_node(self, context)

        error: Optional[ExecutionError] = None
        try:
            self._run_command(context)
        except ExecutionError as e:
            error = e
            raise
        finally:
            if policy is not None and policy.after_node:
                policy.after_node(self, context, error)

    def _run_command(self, context: Context) -> None:
        if context.dry_run:
            logger.info("[dry-run] %s: %s", self.name, self.command)
            context.record(self.name, self.command, None)
            return

        logger.info("Running %s: %s", self.name, self.command)
        try:
            completed = subprocess.run(
                self.command,
                shell=True,
                cwd=str(context.cwd),
                executable=context.shell,
                env=context.environ(),
                check=False,
            )
        except OSError as e:
            context.record(self.name, self.command, None)
            raise ExecutionError(
                f"Task '{self.name}' could not start: {e}",
                node_name=self.name,
                cause=e,
                command=self.command,
            ) from e

        context.record(self.name, self.command, completed.returncode)
        if completed.returncode != 0:
            raise ExecutionError(
                f"Task '{self.name}' failed with exit code {completed.returncode}: {self.command}",
                node_name=self.name,
                command=self.command,
                exit_code=completed.returncode,
            )
        logger.debug("Task %s finished", self.name)

    def __repr__(self) -> str:
        return f"CommandNode(name='{self.name}', command='{self.command}')"


class Serial(Node):
    """
    순차 실행 노드.

    자식 노드들을 순서대로 실행하고, 한 노드가 실패하면 나머지를 실행하지 않습니다.
    """

    def __init__(self, children: List[Node], name: Optional[str] = None, **kwargs):
        super().__init__(name=name or "Serial", **kwargs)
        self.children = children

    def run(self, context: Context) -> None:
        """자식 노드들을 순차 실행"""
        for i, child in enumerate(self.children):
            try:
                child.run(context)
            except ExecutionError as e:
                skipped = len(self.children) - i - 1
                if skipped:
                    logger.debug("Serial '%s' skipping %d remaining task(s)", self.name, skipped)
                raise ExecutionError(
                    f"Serial node '{self.name}' child {i} ('{child.name}') failed: {e}",
                    node_name=e.node_name,
                    cause=e,
                    command=e.command,
                    exit_code=e.exit_code,
                ) from e

    def __repr__(self) -> str:
        return f"Serial(name='{self.name}', children={[c.name for c in self.children]})"
