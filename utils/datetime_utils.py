"""Helpers for local calendar days and ISO timestamps."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional, Union

UTC = timezone.utc

DayLike = Union[date, datetime, str]


def utc_now() -> datetime:
    return datetime.now(UTC)


def local_now() -> datetime:
    """Timezone-aware current time in the machine's local zone."""
    return datetime.now().astimezone()


def local_today() -> date:
    return local_now().date()


def parse_day(value: Optional[DayLike]) -> Optional[date]:
    """Coerce a date, datetime or ``YYYY-MM-DD`` string to a calendar day.

    Full ISO timestamps are accepted and truncated to their date part.
    Returns ``None`` for empty or unparseable input.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def format_day(value: DayLike) -> str:
    """Return the ``YYYY-MM-DD`` key used in persisted activity records."""

    parsed = parse_day(value)
    if parsed is None:
        raise ValueError(f"Not a calendar day: {value!r}")
    return parsed.isoformat()


def to_iso(dt: Optional[datetime]) -> Optional[str]:
    if dt is None:
        return None
    if dt.tzinfo is None:
        # naive values are local wall-clock time
        dt = dt.astimezone()
    return dt.isoformat().replace("+00:00", "Z")


def parse_iso(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt


__all__ = [
    "UTC",
    "DayLike",
    "format_day",
    "local_now",
    "local_today",
    "parse_day",
    "parse_iso",
    "to_iso",
    "utc_now",
]
