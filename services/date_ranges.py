"""Calendar bucket boundaries (day, ISO week, month, quarter)."""
from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional

from utils.datetime_utils import DayLike, local_today, parse_day


class Bucket(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"


@dataclass(frozen=True)
class DateRange:
    """Inclusive span of calendar days."""

    start: date
    end: date

    def contains(self, day: DayLike) -> bool:
        parsed = parse_day(day)
        return parsed is not None and self.start <= parsed <= self.end

    def days(self) -> List[date]:
        return days_in_range(self.start, self.end)

    def __iter__(self) -> Iterator[date]:
        return iter(self.days())

    def __len__(self) -> int:
        return max((self.end - self.start).days + 1, 0)


def _reference_day(reference: Optional[DayLike]) -> date:
    if reference is None:
        return local_today()
    parsed = parse_day(reference)
    if parsed is None:
        raise ValueError(f"Not a calendar day: {reference!r}")
    return parsed


def _last_day(year: int, month: int) -> date:
    return date(year, month, monthrange(year, month)[1])


def day_range(reference: Optional[DayLike] = None) -> DateRange:
    day = _reference_day(reference)
    return DateRange(day, day)


def week_range(reference: Optional[DayLike] = None) -> DateRange:
    """Monday through Sunday of the week containing ``reference``."""
    day = _reference_day(reference)
    start = day - timedelta(days=day.weekday())
    return DateRange(start, start + timedelta(days=6))


def month_range(reference: Optional[DayLike] = None) -> DateRange:
    day = _reference_day(reference)
    return DateRange(day.replace(day=1), _last_day(day.year, day.month))


def quarter_range(reference: Optional[DayLike] = None) -> DateRange:
    day = _reference_day(reference)
    first_month = 3 * ((day.month - 1) // 3) + 1
    return DateRange(date(day.year, first_month, 1), _last_day(day.year, first_month + 2))


_RANGES: Dict[Bucket, Callable[[Optional[DayLike]], DateRange]] = {
    Bucket.DAY: day_range,
    Bucket.WEEK: week_range,
    Bucket.MONTH: month_range,
    Bucket.QUARTER: quarter_range,
}


def normalize_bucket(kind: Bucket | str) -> Bucket:
    try:
        return Bucket(kind)
    except ValueError:
        raise ValueError(f"Unsupported bucket: {kind!r}") from None


def date_range(kind: Bucket | str, reference: Optional[DayLike] = None) -> DateRange:
    return _RANGES[normalize_bucket(kind)](reference)


def days_in_range(start: date, end: date) -> List[date]:
    days: List[date] = []
    current = start
    while current <= end:
        days.append(current)
        current += timedelta(days=1)
    return days


def month_days(year: int, month: int) -> List[date]:
    return days_in_range(date(year, month, 1), _last_day(year, month))


__all__ = [
    "Bucket",
    "DateRange",
    "date_range",
    "day_range",
    "days_in_range",
    "month_days",
    "month_range",
    "normalize_bucket",
    "quarter_range",
    "week_range",
]
