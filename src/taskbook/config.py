# src/taskbook/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Every path lives under a local data dir unless overridden.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKBOOK"

# Real environment variables always win over .env entries.
load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


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
    log_to_file: bool

    # ---- Local data paths ----
    data_dir: Path
    tasks_path: Path

    # ---- Storage ----
    atomic_save: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskbook").strip() or "taskbook"
        log_level = _env(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING"
        log_to_file = _env_bool(_k("LOG_TO_FILE"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskbook"))
        tasks_path = _env_path(_k("TASKS_PATH"), data_dir / "tasks.txt")

        atomic_save = _env_bool(_k("ATOMIC_SAVE"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_to_file=log_to_file,
            data_dir=data_dir,
            tasks_path=tasks_path,
            atomic_save=atomic_save,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
