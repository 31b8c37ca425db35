# contract_tasks/config.py

"""Settings loaded from environment variables (+ optional .env).

One frozen Settings object for the whole process. Every variable carries the
CONTRACT_TASKS_ prefix.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_PREFIX = "CONTRACT_TASKS"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    log_level: str

    # Directory commands start in; json2ts tasks `cd ..` from here.
    workdir: Path
    shell: Optional[str]
    dry_run: bool

    @staticmethod
    def from_env() -> "Settings":
        shell = _env(_k("SHELL"), "/bin/bash").strip() or None
        return Settings(
            log_level=_env(_k("LOG_LEVEL"), "INFO").upper(),
            workdir=_env_path(_k("WORKDIR"), Path(".")),
            shell=shell,
            dry_run=_env_bool(_k("DRY_RUN"), False),
        )


_SETTINGS: Settings | None = None


def get_settings(*, reload: bool = False) -> Settings:
    """Process-wide settings; `.env` is read on first access."""
    global _SETTINGS
    if _SETTINGS is None or reload:
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
