"""Helpers shared by the environment-specific settings modules."""

import json
import os

from timeclock.core.constants import DEFAULT_SCHEDULE_WINDOWS


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


def db_config(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "timeclock"),
    }


def schedule_windows() -> dict:
    """Punch windows; SCHEDULE_WINDOWS_JSON overrides individual entries.

    Example: SCHEDULE_WINDOWS_JSON='{"afternoon_out": ["17:00", "17:10"]}'
    """
    windows = {key: tuple(bounds) for key, bounds in DEFAULT_SCHEDULE_WINDOWS.items()}
    raw = os.getenv("SCHEDULE_WINDOWS_JSON")
    if raw:
        for key, bounds in json.loads(raw).items():
            windows[key] = tuple(bounds)
    return windows
