"""Dated copies of the tracker database with rotation."""
from __future__ import annotations

from datetime import date, datetime, timedelta
from pathlib import Path
from shutil import copy2
from typing import Iterator, Tuple

from core.log import get_logger

logger = get_logger("backup")


def _iter_backups(backups: Path, db_file: Path) -> Iterator[Tuple[Path, date]]:
    prefix = f"{db_file.stem}_"
    for file in backups.glob(f"{prefix}*{db_file.suffix}"):
        try:
            stamp = datetime.strptime(file.stem[len(prefix) :], "%Y-%m-%d").date()
        except ValueError:
            continue
        yield file, stamp


def ensure_daily_backup(
    db_path: str | Path,
    backup_dir: str | Path,
    *,
    keep_days: int = 7,
    today: date | None = None,
) -> Path | None:
    """Copy the database once per day and drop copies older than ``keep_days``."""

    db_file = Path(db_path)
    if not db_file.exists():
        return None

    backups = Path(backup_dir)
    backups.mkdir(parents=True, exist_ok=True)

    today = today or datetime.now().date()
    destination = backups / f"{db_file.stem}_{today.isoformat()}{db_file.suffix}"

    created_path: Path | None = None
    if not destination.exists():
        copy2(db_file, destination)
        created_path = destination
        logger.info("Database backup written to %s", destination)

    if keep_days > 0:
        cutoff = today - timedelta(days=keep_days - 1)
        for file, stamp in _iter_backups(backups, db_file):
            if stamp >= cutoff:
                continue
            try:
                file.unlink()
            except OSError as exc:
                logger.warning("Could not remove old backup %s: %s", file, exc)

    return created_path


__all__ = ["ensure_daily_backup"]
