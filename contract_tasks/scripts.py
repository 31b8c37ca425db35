"""워크스페이스 스크립트 테이블: release 와 schema(json2ts) 태스크 선언

모든 json2ts 커맨드는 `cd ..` 로 시작하므로 스크립트 디렉터리(워크스페이스 루트
바로 아래)에서 실행되어야 합니다. 상대 경로는 그대로 유지해야 합니다.
"""

from contract_tasks.registry.task_registry import TaskDefinition, TaskRegistry, group, task

DISABLED = "Disabled; kept for reference, not generated."


def json2ts(name: str, command: str, enabled: bool = True) -> TaskDefinition:
    return task(
        name,
        command,
        enabled=enabled,
        description=None if enabled else DISABLED,
        tags=["json2ts"],
    )


def build_registry() -> TaskRegistry:
    """워크스페이스 태스크 레지스트리를 생성합니다."""
    return TaskRegistry([
        task("release", "bash build_release.sh", tags=["bash"]),
        group(
            "schema",
            [
                task("transform", "ts-node transform.ts", tags=["ts-node"]),
                task("create", "bash build_schema.sh", tags=["bash"]),
                json2ts(
                    "hub",
                    "cd .. && json2ts -i contracts/dao-lst/**/*.json -o ../liquid-staking-scripts/types/dao-lst/hub",
                ),
                json2ts(
                    "alliance",
                    "cd .. && json2ts -i contracts/alliance-hub-lst/**/*.json -o ../liquid-staking-scripts/types/alliance-hub-lst",
                ),
                json2ts(
                    "ampz",
                    "cd .. && json2ts -i contracts/ampz/schema/*.json -o ../liquid-staking-scripts/types/ampz",
                    enabled=False,
                ),
                json2ts(
                    "arb",
                    "cd .. && json2ts -i contracts/arb-vault/schema/*.json -o ../liquid-staking-scripts/types/tokenfactory/arb-vault",
                ),
                json2ts(
                    "proxies",
                    "cd .. && json2ts -i contracts/proxies/**/*.json -o ../liquid-staking-scripts/types/proxies",
                ),
                json2ts(
                    "token",
                    "cd .. && json2ts -i contracts/token/**/*.json -o ../liquid-staking-scripts/types/token",
                    enabled=False,
                ),
                json2ts(
                    "ampextractor",
                    "cd .. && json2ts -i contracts/amp-extractor/**/*.json -o ../liquid-staking-scripts/types/amp-extractor",
                    enabled=False,
                ),
                json2ts(
                    "votingescrow",
                    "cd .. && json2ts -i contracts/amp-governance/voting_escrow/**/*.json -o ../liquid-staking-scripts/types/tokenfactory/voting_escrow",
                ),
                json2ts(
                    "ampgauges",
                    "cd .. && json2ts -i contracts/amp-governance/amp_gauges/**/*.json -o ../liquid-staking-scripts/types/amp_gauges",
                    enabled=False,
                ),
                json2ts(
                    "empgauges",
                    "cd .. && json2ts -i contracts/amp-governance/emp_gauges/**/*.json -o ../liquid-staking-scripts/types/emp_gauges",
                    enabled=False,
                ),
                json2ts(
                    "propgauges",
                    "cd .. && json2ts -i contracts/amp-governance/prop_gauges/**/*.json -o ../liquid-staking-scripts/types/prop_gauges",
                    enabled=False,
                ),
                json2ts(
                    "farm",
                    "cd .. && json2ts -i contracts/amp-compounder/astroport_farm/**/*.json -o ../liquid-staking-scripts/types/tokenfactory/amp-compounder/astroport_farm",
                ),
                json2ts(
                    "compound",
                    "cd .. && json2ts -i contracts/amp-compounder/compound_proxy/**/*.json -o ../liquid-staking-scripts/types/amp-compounder/compound_proxy",
                    enabled=False,
                ),
                json2ts(
                    "fees",
                    "cd .. && json2ts -i contracts/amp-compounder/fees_collector/**/*.json -o ../liquid-staking-scripts/types/amp-compounder/fees_collector",
                    enabled=False,
                ),
                json2ts(
                    "generator",
                    "cd .. && json2ts -i contracts/amp-compounder/generator_proxy/**/*.json -o ../liquid-staking-scripts/types/tokenfactory/amp-compounder/generator_proxy",
                ),
            ],
            # 나머지 json2ts 태스크는 필요할 때 개별 실행
            default=["create", "transform", "hub"],
        ),
    ])


# 전역 레지스트리 인스턴스
SCRIPTS = build_registry()


def get_scripts() -> TaskRegistry:
    """전역 스크립트 레지스트리를 반환합니다."""
    return SCRIPTS
