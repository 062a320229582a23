from datetime import date, timedelta
import logging
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from core import settings
from core.log import ROOT_LOGGER, get_logger, resolve_level
from storage.backup import _iter_backups, ensure_daily_backup

HOME = Path("/home/ana")


@pytest.mark.parametrize(
    "platform, env, expected",
    [
        ("linux", {}, HOME / ".local/share/Performance Tracker"),
        ("linux", {"XDG_DATA_HOME": "/data"}, Path("/data/Performance Tracker")),
        ("darwin", {}, HOME / "Library/Application Support/Performance Tracker"),
        ("win32", {"APPDATA": "D:/Roaming"}, Path("D:/Roaming/Performance Tracker")),
        ("win32", {}, HOME / "AppData/Roaming/Performance Tracker"),
    ],
)
def test_platform_data_dirs(platform, env, expected):
    assert settings.get_default_data_dir(settings.APP_NAME, platform=platform, env=env, home=HOME) == expected


@pytest.mark.parametrize("platform", ["linux", "darwin", "win32"])
def test_tracker_data_dir_overrides_every_platform(platform):
    env = {"TRACKER_DATA_DIR": "/srv/tracker", "XDG_DATA_HOME": "/data", "APPDATA": "D:/Roaming"}
    result = settings.get_default_data_dir(settings.APP_NAME, platform=platform, env=env, home=HOME)
    assert result == Path("/srv/tracker")


def test_empty_override_is_ignored():
    result = settings.get_default_data_dir("Tracker", platform="linux", env={"TRACKER_DATA_DIR": ""}, home=HOME)
    assert result == HOME / ".local/share/Tracker"


def test_slashes_in_app_name_stay_in_one_folder():
    result = settings.get_default_data_dir("a/b", platform="linux", env={}, home=HOME)
    assert result.name == "a-b"


def test_runtime_layout():
    assert settings.DB_PATH == settings.DATA_DIR / "tracker.db"
    assert settings.LOG_DIR.parent == settings.DATA_DIR
    assert settings.BACKUP_DIR.parent == settings.DATA_DIR
    assert settings.LOGGING.path == settings.LOG_PATH
    assert settings.LOG_PATH.parent == settings.LOG_DIR
    assert settings.BACKUP.directory == settings.BACKUP_DIR
    assert settings.LOG_DIR.is_dir() and settings.BACKUP_DIR.is_dir()


def test_storage_keys_share_prefix():
    keys = vars(settings.STORAGE_KEYS).values()
    assert all(key.startswith("performance_tracker_") for key in keys)
    assert len(set(keys)) == 6


@pytest.mark.parametrize(
    "name, level",
    [("DEBUG", logging.DEBUG), ("warning", logging.WARNING), (" error ", logging.ERROR), ("loud", logging.INFO), ("", logging.INFO)],
)
def test_log_level_names(name, level):
    assert resolve_level(name) == level


def test_area_loggers_hang_off_tracker_root():
    logger = get_logger("store")
    assert logger.name == f"{ROOT_LOGGER}.store"
    root = logging.getLogger(ROOT_LOGGER)
    assert len(root.handlers) == 1
    get_logger("notify")
    assert len(root.handlers) == 1


def test_backup_keeps_last_days(tmp_path):
    db_path = tmp_path / "tracker.db"
    backup_dir = tmp_path / "backups"
    start = date(2024, 3, 1)

    for offset in range(6):
        db_path.write_text(f"day {offset}", encoding="utf-8")
        created = ensure_daily_backup(db_path, backup_dir, keep_days=2, today=start + timedelta(days=offset))
        assert created is not None

    remaining = sorted(stamp for _, stamp in _iter_backups(backup_dir, db_path))
    assert remaining == [date(2024, 3, 5), date(2024, 3, 6)]
    assert (backup_dir / "tracker_2024-03-06.db").read_text(encoding="utf-8") == "day 5"


def test_backup_once_per_day(tmp_path):
    db_path = tmp_path / "tracker.db"
    db_path.write_text("first", encoding="utf-8")
    day = date(2024, 3, 4)
    assert ensure_daily_backup(db_path, tmp_path / "b", today=day) is not None
    db_path.write_text("second", encoding="utf-8")
    assert ensure_daily_backup(db_path, tmp_path / "b", today=day) is None
    assert (tmp_path / "b" / "tracker_2024-03-04.db").read_text(encoding="utf-8") == "first"


def test_backup_listing_skips_foreign_files(tmp_path):
    db_path = tmp_path / "tracker.db"
    (tmp_path / "tracker_2024-03-04.db").write_text("", encoding="utf-8")
    (tmp_path / "tracker_notes.db").write_text("", encoding="utf-8")
    (tmp_path / "other_2024-03-04.db").write_text("", encoding="utf-8")
    found = list(_iter_backups(tmp_path, db_path))
    assert found == [(tmp_path / "tracker_2024-03-04.db", date(2024, 3, 4))]


def test_missing_database_is_not_backed_up(tmp_path):
    assert ensure_daily_backup(tmp_path / "absent.db", tmp_path / "b") is None
    assert not (tmp_path / "b").exists()
