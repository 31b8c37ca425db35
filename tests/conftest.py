# tests/conftest.py

from __future__ import annotations

import subprocess
from typing import Dict, List

import pytest

from contract_tasks import config
from contract_tasks.registry.task_registry import TaskRegistry
from contract_tasks.scripts import build_registry


class FakeShell:
    """
    Stand-in for subprocess.run.

    Records every call and answers with a configurable exit code per command,
    so runner tests never spawn a real shell.
    """

    def __init__(self) -> None:
        self.calls: List[Dict] = []
        self.exit_codes: Dict[str, int] = {}

    def fail(self, command: str, code: int = 1) -> None:
        self.exit_codes[command] = code

    def __call__(self, command, **kwargs):
        self.calls.append({"command": command, **kwargs})
        return subprocess.CompletedProcess(args=command, returncode=self.exit_codes.get(command, 0))

    @property
    def commands(self) -> List[str]:
        return [c["command"] for c in self.calls]


@pytest.fixture()
def registry() -> TaskRegistry:
    return build_registry()


@pytest.fixture()
def fake_shell(monkeypatch: pytest.MonkeyPatch) -> FakeShell:
    shell = FakeShell()
    monkeypatch.setattr("contract_tasks.core.node.subprocess.run", shell)
    return shell


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Fresh Settings per test, unaffected by the developer's environment."""
    for name in ("LOG_LEVEL", "WORKDIR", "SHELL", "DRY_RUN"):
        monkeypatch.delenv(f"CONTRACT_TASKS_{name}", raising=False)
    monkeypatch.setattr(config, "_SETTINGS", None)
    monkeypatch.setattr(config, "load_dotenv", lambda **_: False)
