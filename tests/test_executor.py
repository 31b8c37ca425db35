# tests/test_executor.py

from __future__ import annotations

from pathlib import Path

import pytest

from contract_tasks.core.context import Context
from contract_tasks.core.executor import ExecutionPolicy, Executor, build_node
from contract_tasks.core.node import CommandNode, ExecutionError, Serial
from contract_tasks.registry.task_registry import NotFoundError

HUB = "cd .. && json2ts -i contracts/dao-lst/**/*.json -o ../liquid-staking-scripts/types/dao-lst/hub"


def test_release_issues_a_single_shell_call(registry, fake_shell, tmp_path: Path) -> None:
    result = Executor().run_tasks(registry, ["release"], cwd=tmp_path)

    assert result.success
    assert result.exit_code == 0
    assert fake_shell.commands == ["bash build_release.sh"]
    call = fake_shell.calls[0]
    assert call["shell"] is True
    assert call["cwd"] == str(tmp_path)


def test_schema_default_runs_create_transform_hub_in_order(registry, fake_shell, tmp_path: Path) -> None:
    result = Executor().run_tasks(registry, ["schema"], cwd=tmp_path)

    assert result.success
    assert fake_shell.commands == ["bash build_schema.sh", "ts-node transform.ts", HUB]
    # every command starts from the same directory; `cd ..` stays inside its own shell
    assert {c["cwd"] for c in fake_shell.calls} == {str(tmp_path)}


def test_failing_subtask_stops_the_sequence(registry, fake_shell, tmp_path: Path) -> None:
    fake_shell.fail("ts-node transform.ts", code=3)

    result = Executor().run_tasks(registry, ["schema"], cwd=tmp_path)

    assert not result.success
    assert result.exit_code == 3
    assert fake_shell.commands == ["bash build_schema.sh", "ts-node transform.ts"]
    error = result.errors[0]
    assert error.node_name == "schema.transform"
    assert error.command == "ts-node transform.ts"


def test_multiple_tasks_run_in_given_order(registry, fake_shell) -> None:
    result = Executor().run_tasks(registry, ["schema.arb", "release"])
    assert result.success
    assert fake_shell.commands == [registry.resolve("schema.arb"), "bash build_release.sh"]


def test_unknown_task_raises_before_anything_runs(registry, fake_shell) -> None:
    with pytest.raises(NotFoundError):
        Executor().run_tasks(registry, ["release", "schema.unknown"])
    assert fake_shell.calls == []


def test_dry_run_records_without_running(registry, fake_shell) -> None:
    result = Executor(ExecutionPolicy(dry_run=True)).run_tasks(registry, ["schema"])

    assert result.success
    assert fake_shell.calls == []
    assert result.context.commands == ["bash build_schema.sh", "ts-node transform.ts", HUB]
    assert all(r.exit_code is None for r in result.context.records)


def test_policy_shell_and_env_are_passed_through(registry, fake_shell, monkeypatch) -> None:
    monkeypatch.setenv("PATH_MARKER", "kept")
    policy = ExecutionPolicy(shell="/bin/bash", env={"NODE_ENV": "production"})

    Executor(policy).run_tasks(registry, ["release"])

    call = fake_shell.calls[0]
    assert call["executable"] == "/bin/bash"
    assert call["env"]["NODE_ENV"] == "production"
    assert call["env"]["PATH_MARKER"] == "kept"


def test_hooks_called_per_command(registry, fake_shell) -> None:
    seen = []
    policy = ExecutionPolicy(
        before_node=lambda node, ctx: seen.append(("before", node.name)),
        after_node=lambda node, ctx, err: seen.append(("after", node.name, err is None)),
    )
    fake_shell.fail("bash build_schema.sh")

    result = Executor(policy).run_tasks(registry, ["schema"])

    assert not result.success
    assert seen == [("before", "schema.create"), ("after", "schema.create", False)]


def test_build_node_shapes(registry) -> None:
    leaf = build_node(registry, "release")
    assert isinstance(leaf, CommandNode)
    assert leaf.command == "bash build_release.sh"

    composite = build_node(registry, ["schema"])
    assert isinstance(composite, Serial)
    assert [c.name for c in composite.children] == ["schema.create", "schema.transform", "schema.hub"]


def test_command_that_cannot_start(monkeypatch, tmp_path: Path) -> None:
    def boom(*args, **kwargs):
        raise FileNotFoundError("no such shell")

    monkeypatch.setattr("contract_tasks.core.node.subprocess.run", boom)
    node = CommandNode("bash build_release.sh", name="release")

    with pytest.raises(ExecutionError) as exc:
        node.run(Context(cwd=tmp_path))
    assert exc.value.exit_code is None

    result = Executor().run(node, cwd=tmp_path)
    assert result.exit_code == 1
