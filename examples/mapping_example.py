"""nps 스타일 매핑으로 레지스트리를 만들고 dry-run 하는 예제"""

import sys
from pathlib import Path

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from contract_tasks import Executor, ExecutionPolicy, registry_from_mapping


PACKAGE_SCRIPTS = {
    "scripts": {
        "release": {"default": "bash build_release.sh"},
        "schema": {
            "default": "nps schema.create schema.hub",
            "create": "bash build_schema.sh",
            "hub": "cd .. && json2ts -i contracts/dao-lst/**/*.json -o ../liquid-staking-scripts/types/dao-lst/hub",
        },
    }
}


def main():
    print("=" * 60)
    print("contract-tasks 매핑 예제")
    print("=" * 60)

    registry = registry_from_mapping(PACKAGE_SCRIPTS)
    for path in registry.list_tasks():
        print(f"  - {path}")

    executor = Executor(ExecutionPolicy(dry_run=True))
    result = executor.run_tasks(registry, ["schema"])

    print("\n[실행될 커맨드]")
    for command in result.context.commands:
        print(f"  $ {command}")
    print(f"\nSuccess: {result.success}")


if __name__ == "__main__":
    main()
