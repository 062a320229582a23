"""Shared logger setup: one rotating file for the whole application."""
from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from core.settings import LOGGING

ROOT_LOGGER = "tracker"


def resolve_level(name: str) -> int:
    """Map a level name such as ``"debug"`` to its number, INFO when unknown."""
    level = logging.getLevelName(str(name).strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _ensure_root() -> logging.Logger:
    logger = logging.getLogger(ROOT_LOGGER)
    if not logger.handlers:
        LOGGING.path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            LOGGING.path,
            maxBytes=LOGGING.max_bytes,
            backupCount=LOGGING.backup_count,
            encoding="utf-8",
        )
        formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(resolve_level(LOGGING.level))
    return logger


def get_logger(area: str) -> logging.Logger:
    """Return ``tracker.<area>``; records propagate to the rotating file."""
    _ensure_root()
    return logging.getLogger(f"{ROOT_LOGGER}.{area}")


__all__ = ["ROOT_LOGGER", "get_logger", "resolve_level"]
