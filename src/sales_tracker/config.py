# src/sales_tracker/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing required at import time; every value has a default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "SALES_TRACKER"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
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

    # ---- Base task source ----
    tasks_url: str
    fetch_timeout_seconds: float

    # ---- Seed data (used when the source is empty) ----
    seed_count: int
    seed_random_seed: int | None

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    user_tasks_db_path: Path
    user_tasks_key: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "sales-tracker") or "sales-tracker"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        tasks_url = _env(_k("TASKS_URL"), "http://localhost:8000/tasks.json")
        fetch_timeout_seconds = max(0.5, _env_float(_k("FETCH_TIMEOUT_SECONDS"), 10.0))

        seed_count = max(0, _env_int(_k("SEED_COUNT"), 50))
        seed_random_seed = _env_optional_int(_k("SEED"))

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/sales_tracker"))
        user_tasks_db_path = _env_path(_k("USER_TASKS_DB_PATH"), data_dir / "user_tasks.sqlite3")
        user_tasks_key = _env(_k("USER_TASKS_KEY"), "user_tasks") or "user_tasks"

        return Settings(
            app_name=app_name,
            log_level=log_level,
            tasks_url=tasks_url,
            fetch_timeout_seconds=fetch_timeout_seconds,
            seed_count=seed_count,
            seed_random_seed=seed_random_seed,
            data_dir=data_dir,
            user_tasks_db_path=user_tasks_db_path,
            user_tasks_key=user_tasks_key,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
