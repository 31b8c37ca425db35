"""
CLI entrypoint: `contract-tasks schema`, `contract-tasks schema.hub release`, ...

Tasks given on the command line run in order; the first failing command stops
the run and its exit code becomes the process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from contract_tasks.config import get_settings
from contract_tasks.core.executor import ExecutionPolicy, Executor
from contract_tasks.logging_setup import setup_logging
from contract_tasks.registry.task_registry import NotFoundError, TaskRegistry
from contract_tasks.scripts import get_scripts

logger = logging.getLogger(__name__)

EXIT_NOT_FOUND = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contract-tasks",
        description="Run workspace build and schema-to-types tasks.",
    )
    parser.add_argument("tasks", nargs="*", help="task paths, e.g. schema or schema.hub")
    parser.add_argument("-l", "--list", action="store_true", help="list tasks and exit")
    parser.add_argument("--all", action="store_true", help="include disabled tasks when listing")
    parser.add_argument("-n", "--dry-run", action="store_true", default=None, help="print commands without running them")
    parser.add_argument("--cwd", default=None, help="directory commands start in (the scripts directory)")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    return parser


def format_listing(registry: TaskRegistry, include_disabled: bool = False) -> List[str]:
    """`path  command` lines for every task, disabled ones marked."""
    lines = []
    for dotted, definition in registry.walk(include_disabled=include_disabled):
        if definition.is_group:
            if definition.default is None:
                continue
            command = definition.default.render(dotted)
        else:
            command = definition.command
        marker = " (disabled)" if not definition.enabled else ""
        lines.append(f"{dotted}{marker}  {command}")
    return lines


def main(argv: Optional[Sequence[str]] = None, registry: Optional[TaskRegistry] = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = get_settings()
    registry = registry or get_scripts()

    setup_logging(level=args.log_level or settings.log_level)

    if args.list or not args.tasks:
        for line in format_listing(registry, include_disabled=args.all):
            print(line)
        return 0

    policy = ExecutionPolicy(
        dry_run=settings.dry_run if args.dry_run is None else args.dry_run,
        shell=settings.shell,
    )
    cwd = args.cwd if args.cwd is not None else settings.workdir

    try:
        result = Executor(policy).run_tasks(registry, args.tasks, cwd=cwd)
    except NotFoundError as e:
        logger.error("%s", e)
        return EXIT_NOT_FOUND

    if not result.success:
        failed = result.errors[0]
        logger.error("Command failed (exit %s): %s", result.exit_code, failed.command)
    else:
        logger.info("Done in %.2fs", result.duration)
    return result.exit_code


def main_entry() -> None:
    sys.exit(main())


if __name__ == "__main__":
    main_entry()
