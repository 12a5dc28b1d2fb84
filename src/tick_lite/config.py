# src/tick_lite/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Every value has a safe local default; nothing is required at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TICK"

load_dotenv(override=False)


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

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    tasks_path: Path
    seed_on_first_run: bool

    # ---- Reminders ----
    reminders_enabled: bool
    reminder_interval_seconds: float
    reminder_window_seconds: float
    notifications_enabled: bool

    # ---- Actions ----
    snooze_days_default: float

    @staticmethod
    def from_env() -> "Settings":
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/tick_lite"))

        return Settings(
            app_name=_env(_k("APP_NAME"), "tick-lite") or "tick-lite",
            log_level=_env(_k("LOG_LEVEL"), "INFO"),
            data_dir=data_dir,
            tasks_path=_env_path(_k("TASKS_PATH"), data_dir / "tasks.json"),
            seed_on_first_run=_env_bool(_k("SEED_ON_FIRST_RUN"), True),
            reminders_enabled=_env_bool(_k("REMINDERS_ENABLED"), True),
            reminder_interval_seconds=max(1.0, _env_float(_k("REMINDER_INTERVAL_SECONDS"), 30.0)),
            reminder_window_seconds=max(1.0, _env_float(_k("REMINDER_WINDOW_SECONDS"), 60.0)),
            notifications_enabled=_env_bool(_k("NOTIFICATIONS_ENABLED"), False),
            snooze_days_default=_env_float(_k("SNOOZE_DAYS_DEFAULT"), 1.0),
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
