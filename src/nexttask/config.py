# src/nexttask/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Every value has a working default, so a bare `nexttask` invocation just works.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "NEXTTASK"

DEFAULT_LIST_LIMIT = 10_000
DEFAULT_MAX_TREE_DEPTH = 100


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int, *, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= minimum else default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- Logging ----
    log_level: str

    # ---- Local data paths ----
    data_dir: Path
    db_path: Path

    # ---- Limits ----
    list_limit: int
    max_tree_depth: int

    # ---- Output ----
    table_format: str

    @staticmethod
    def from_env() -> "Settings":
        log_level = _env(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING"

        data_dir = _env_path(_k("DATA_DIR"), Path("~/.local/share/nexttask").expanduser())
        db_path = _env_path(_k("DB_PATH"), data_dir / "tasks.sqlite3")

        list_limit = _env_int(_k("LIST_LIMIT"), DEFAULT_LIST_LIMIT, minimum=1)
        max_tree_depth = _env_int(_k("MAX_TREE_DEPTH"), DEFAULT_MAX_TREE_DEPTH, minimum=1)

        table_format = _env(_k("TABLE_FORMAT"), "simple").strip() or "simple"

        return Settings(
            log_level=log_level,
            data_dir=data_dir,
            db_path=db_path,
            list_limit=list_limit,
            max_tree_depth=max_tree_depth,
            table_format=table_format,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
