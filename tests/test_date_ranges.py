from datetime import date, datetime
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from services.date_ranges import (
    Bucket,
    DateRange,
    date_range,
    days_in_range,
    month_days,
)


def test_day_range_is_single_day():
    rng = date_range("day", date(2024, 3, 4))
    assert rng == DateRange(date(2024, 3, 4), date(2024, 3, 4))
    assert len(rng) == 1


def test_week_starts_on_monday():
    # 2024-03-06 is a Wednesday
    rng = date_range(Bucket.WEEK, date(2024, 3, 6))
    assert rng.start == date(2024, 3, 4)
    assert rng.end == date(2024, 3, 10)
    assert rng.start.weekday() == 0


def test_week_of_a_sunday_ends_that_sunday():
    rng = date_range("week", date(2024, 3, 10))
    assert rng.start == date(2024, 3, 4)
    assert rng.end == date(2024, 3, 10)


def test_week_crossing_year_boundary():
    rng = date_range("week", date(2025, 1, 1))
    assert rng.start == date(2024, 12, 30)
    assert rng.end == date(2025, 1, 5)


def test_month_range_handles_leap_february():
    rng = date_range("month", datetime(2024, 2, 10, 15, 30))
    assert rng.start == date(2024, 2, 1)
    assert rng.end == date(2024, 2, 29)


@pytest.mark.parametrize(
    "reference, start, end",
    [
        (date(2024, 1, 1), date(2024, 1, 1), date(2024, 3, 31)),
        (date(2024, 5, 15), date(2024, 4, 1), date(2024, 6, 30)),
        (date(2024, 9, 30), date(2024, 7, 1), date(2024, 9, 30)),
        (date(2024, 12, 31), date(2024, 10, 1), date(2024, 12, 31)),
    ],
)
def test_quarter_range(reference, start, end):
    rng = date_range("quarter", reference)
    assert (rng.start, rng.end) == (start, end)


def test_string_reference_is_accepted():
    assert date_range("month", "2024-03-04").end == date(2024, 3, 31)


def test_default_reference_is_today(monkeypatch):
    import services.date_ranges as module

    monkeypatch.setattr(module, "local_today", lambda: date(2024, 3, 6))
    assert date_range("week").start == date(2024, 3, 4)


def test_unknown_bucket_raises():
    with pytest.raises(ValueError):
        date_range("fortnight", date(2024, 3, 4))


def test_contains_is_inclusive():
    rng = date_range("week", date(2024, 3, 6))
    assert rng.contains("2024-03-04")
    assert rng.contains(date(2024, 3, 10))
    assert not rng.contains("2024-03-11")
    assert not rng.contains("garbage")


def test_days_helpers():
    assert days_in_range(date(2024, 2, 28), date(2024, 3, 1)) == [
        date(2024, 2, 28),
        date(2024, 2, 29),
        date(2024, 3, 1),
    ]
    assert len(month_days(2023, 2)) == 28
    assert month_days(2024, 4)[-1] == date(2024, 4, 30)
