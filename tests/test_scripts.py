# tests/test_scripts.py

from __future__ import annotations

import pytest

from contract_tasks.registry.schemas import check_disjoint_targets
from contract_tasks.registry.task_registry import CompositeDefault, NotFoundError, TaskDisabledError
from contract_tasks.scripts import SCRIPTS, get_scripts

TYPES = "../liquid-staking-scripts/types"

EXPECTED = {
    "release": "bash build_release.sh",
    "schema.transform": "ts-node transform.ts",
    "schema.create": "bash build_schema.sh",
    "schema.hub": f"cd .. && json2ts -i contracts/dao-lst/**/*.json -o {TYPES}/dao-lst/hub",
    "schema.alliance": f"cd .. && json2ts -i contracts/alliance-hub-lst/**/*.json -o {TYPES}/alliance-hub-lst",
    "schema.arb": f"cd .. && json2ts -i contracts/arb-vault/schema/*.json -o {TYPES}/tokenfactory/arb-vault",
    "schema.proxies": f"cd .. && json2ts -i contracts/proxies/**/*.json -o {TYPES}/proxies",
    "schema.votingescrow": (
        f"cd .. && json2ts -i contracts/amp-governance/voting_escrow/**/*.json -o {TYPES}/tokenfactory/voting_escrow"
    ),
    "schema.farm": (
        "cd .. && json2ts -i contracts/amp-compounder/astroport_farm/**/*.json "
        f"-o {TYPES}/tokenfactory/amp-compounder/astroport_farm"
    ),
    "schema.generator": (
        "cd .. && json2ts -i contracts/amp-compounder/generator_proxy/**/*.json "
        f"-o {TYPES}/tokenfactory/amp-compounder/generator_proxy"
    ),
}

DISABLED = ["ampz", "token", "ampextractor", "ampgauges", "empgauges", "propgauges", "compound", "fees"]


def test_global_registry_is_a_single_instance() -> None:
    assert get_scripts() is SCRIPTS


@pytest.mark.parametrize("path, command", sorted(EXPECTED.items()))
def test_every_task_resolves_to_its_literal_command(registry, path, command) -> None:
    assert registry.resolve(path) == command


def test_schema_default_is_create_transform_hub(registry) -> None:
    resolved = registry.resolve(["schema"])
    assert isinstance(resolved, CompositeDefault)
    assert list(resolved) == ["create", "transform", "hub"]
    assert resolved.render("schema") == "nps schema.create schema.transform schema.hub"


def test_unknown_schema_subtask(registry) -> None:
    with pytest.raises(NotFoundError):
        registry.resolve(["schema", "unknown"])


def test_release_is_a_plain_command(registry) -> None:
    assert registry.resolve(["release"]) == "bash build_release.sh"


def test_enabled_task_list_matches_declaration(registry) -> None:
    assert registry.list_tasks() == [
        "release",
        "schema",
        "schema.transform",
        "schema.create",
        "schema.hub",
        "schema.alliance",
        "schema.arb",
        "schema.proxies",
        "schema.votingescrow",
        "schema.farm",
        "schema.generator",
    ]


@pytest.mark.parametrize("name", DISABLED)
def test_disabled_entries_are_preserved(registry, name) -> None:
    definition = registry.get(["schema", name])
    assert not definition.enabled
    assert definition.command.startswith("cd .. && json2ts -i contracts/")
    assert definition.description
    with pytest.raises(TaskDisabledError):
        registry.resolve(["schema", name])


def test_json2ts_tasks_run_from_parent_directory(registry) -> None:
    for definition in registry.get_by_tag("json2ts"):
        assert definition.command.startswith("cd .. && json2ts ")


def test_json2ts_targets_are_exact_pairs(registry) -> None:
    targets = {t.task: t for t in registry.json2ts_targets()}
    assert set(targets) == {
        "schema.hub",
        "schema.alliance",
        "schema.arb",
        "schema.proxies",
        "schema.votingescrow",
        "schema.farm",
        "schema.generator",
    }

    arb = targets["schema.arb"]
    assert arb.input_glob == "contracts/arb-vault/schema/*.json"
    assert arb.output_dir == f"{TYPES}/tokenfactory/arb-vault"
    assert arb.cwd == ".."

    hub = targets["schema.hub"]
    assert hub.input_glob == "contracts/dao-lst/**/*.json"
    assert hub.output_dir == f"{TYPES}/dao-lst/hub"


def test_json2ts_targets_do_not_overlap(registry) -> None:
    targets = registry.json2ts_targets()
    check_disjoint_targets(targets)
    outputs = [t.output_dir for t in targets]
    assert len(outputs) == len(set(outputs))
