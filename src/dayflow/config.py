# src/dayflow/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing required at import time: every variable has a default.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "DAYFLOW"

STORAGE_BACKENDS = ("json", "sqlite")
LOCALES = ("en", "ja")

logger = logging.getLogger(__name__)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    raw = _env(name, default).strip().lower()
    if raw not in choices:
        logger.warning("Ignoring %s=%r (expected one of %s).", name, raw, ", ".join(choices))
        return default
    return raw


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

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    storage_backend: str
    storage_path: Path

    # ---- Planner behavior ----
    week_start_day: int
    locale: str
    today_task_limit: int
    seed_on_empty: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "dayflow").strip() or "dayflow"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/dayflow"))
        storage_backend = _env_choice(_k("STORAGE_BACKEND"), STORAGE_BACKENDS, "json")
        default_file = "dayflow.sqlite3" if storage_backend == "sqlite" else "dayflow.json"
        storage_path = _env_path(_k("STORAGE_PATH"), data_dir / default_file)

        # weekday() numbering: Monday=0 ... Sunday=6
        week_start_day = _env_int(_k("WEEK_START_DAY"), 0)
        if not 0 <= week_start_day <= 6:
            logger.warning("Ignoring %s=%s (expected 0..6).", _k("WEEK_START_DAY"), week_start_day)
            week_start_day = 0

        locale = _env_choice(_k("LOCALE"), LOCALES, "en")
        today_task_limit = max(0, _env_int(_k("TODAY_TASK_LIMIT"), 3))
        seed_on_empty = _env_bool(_k("SEED_ON_EMPTY"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            storage_backend=storage_backend,
            storage_path=storage_path,
            week_start_day=week_start_day,
            locale=locale,
            today_task_limit=today_task_limit,
            seed_on_empty=seed_on_empty,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
