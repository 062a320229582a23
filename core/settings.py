"""Centralized application configuration."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional
import os
import sys


def get_default_data_dir(
    app_name: str,
    *,
    platform: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    home: Optional[Path] = None,
) -> Path:
    """Return an OS-specific user data directory for ``app_name``.

    ``TRACKER_DATA_DIR`` in the environment wins over the platform default.
    """

    platform_id = (platform or sys.platform).lower()
    environ = dict(env if env is not None else os.environ)
    override = environ.get("TRACKER_DATA_DIR")
    if override:
        return Path(override).expanduser()

    home_dir = Path(home or Path.home())
    sanitized = app_name.strip() or "app"
    sanitized = sanitized.replace("/", "-").replace("\\", "-")

    if platform_id.startswith("win"):
        base = Path(environ.get("APPDATA") or home_dir / "AppData" / "Roaming")
    elif platform_id == "darwin":
        base = Path(environ.get("APPDATA") or home_dir / "Library" / "Application Support")
    else:
        base = Path(environ.get("XDG_DATA_HOME") or home_dir / ".local" / "share")

    return (base.expanduser() / sanitized)


APP_NAME = "Performance Tracker"


DATA_DIR = get_default_data_dir(APP_NAME)
LOG_DIR = DATA_DIR / "logs"
BACKUP_DIR = DATA_DIR / "backups"

for _dir in (DATA_DIR, LOG_DIR, BACKUP_DIR):
    _dir.mkdir(parents=True, exist_ok=True)


DB_PATH = DATA_DIR / "tracker.db"
LOG_PATH = LOG_DIR / "tracker.log"


@dataclass(frozen=True)
class StorageKeys:
    tasks: str = "performance_tracker_tasks"
    activities: str = "performance_tracker_activities"
    categories: str = "performance_tracker_categories"
    settings: str = "performance_tracker_settings"
    last_reminder: str = "performance_tracker_last_reminder"
    last_report: str = "performance_tracker_last_report"


STORAGE_KEYS = StorageKeys()


@dataclass(frozen=True)
class TrackerSettings:
    # activity created when a habit is ticked on the month grid
    synthetic_duration_minutes: int = 60
    synthetic_note: str = "Completed via tracker"
    default_duration_minutes: int = 60
    default_goal_days: int = 30
    trend_days: int = 30
    top_tasks_limit: int = 10
    # Monday-start weeks a month can touch; March 2025 needs all six
    max_weeks_per_month: int = 6
    reminder_pending_names: int = 5


TRACKER = TrackerSettings()


@dataclass(frozen=True)
class EmailSettings:
    endpoint: str = "https://api.emailjs.com/api/v1.0/email/send"
    timeout_sec: float = 10.0


EMAIL = EmailSettings()


@dataclass(frozen=True)
class ReminderSettings:
    enabled: bool = True
    interval_sec: int = 24 * 60 * 60
    resend_after_days: int = 7


REMINDERS = ReminderSettings()


@dataclass(frozen=True)
class LogSettings:
    path: Path = LOG_PATH
    max_bytes: int = 1_000_000
    backup_count: int = 3
    level: str = os.environ.get("TRACKER_LOG_LEVEL", "INFO")


LOGGING = LogSettings()


@dataclass(frozen=True)
class ThemeColors:
    safe_surface_bg: str = "#F1F5F9"
    outline: str = "#E5E7EB"
    text_subtle: str = "#6B7280"
    accent: str = "#6366F1"
    completed_cell: str = "#3B82F6"
    today_bg: str = "#EEF2FF"


@dataclass(frozen=True)
class UISettings:
    app_title: str = APP_NAME
    theme_mode: str = "system"
    color_scheme_seed: str = "#4F46E5"
    window_min_width: int = 900
    window_min_height: int = 600
    grid_cell_width: int = 34
    grid_name_width: int = 180
    theme: ThemeColors = ThemeColors()


UI = UISettings()


@dataclass(frozen=True)
class BackupSettings:
    enabled: bool = True
    directory: Path = BACKUP_DIR
    keep_days: int = 7


BACKUP = BackupSettings()


__all__ = [
    "APP_NAME",
    "DATA_DIR",
    "LOG_DIR",
    "BACKUP_DIR",
    "DB_PATH",
    "LOG_PATH",
    "STORAGE_KEYS",
    "TRACKER",
    "EMAIL",
    "REMINDERS",
    "LOGGING",
    "UI",
    "BACKUP",
    "get_default_data_dir",
]
