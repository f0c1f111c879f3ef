# src/jot/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing required at import time; commands that need the workspace check for it.
- Legacy J_WORKSPACE / EDITOR variables keep working.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_PREFIX = "JOT"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


# Local .env never overrides variables already set in the environment.
load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Workspace ----
    workspace: Optional[Path]
    editor: str

    # ---- Local data paths ----
    data_dir: Path
    log_dir: Path

    # ---- Queue ----
    # 0 means unbounded.
    queue_max_steps: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "jot") or "jot"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        raw_workspace = _first_env(_k("WORKSPACE"), "J_WORKSPACE", default=None)
        workspace = Path(raw_workspace.strip()).expanduser() if raw_workspace else None

        editor = (_first_env(_k("EDITOR"), "EDITOR", default="vi") or "vi").strip()

        data_dir = _env_path(_k("DATA_DIR"), Path("~/.local/state/jot").expanduser())
        log_dir = _env_path(_k("LOG_DIR"), data_dir)

        queue_max_steps = max(0, _env_int(_k("QUEUE_MAX_STEPS"), 0))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            workspace=workspace,
            editor=editor,
            data_dir=data_dir,
            log_dir=log_dir,
            queue_max_steps=queue_max_steps,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
