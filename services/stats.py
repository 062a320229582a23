"""Activity rollups per calendar bucket and task completion rate."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple

from models import ActivityLog, Task
from services.date_ranges import (
    Bucket,
    DateRange,
    day_range,
    month_range,
    normalize_bucket,
    quarter_range,
    week_range,
)
from utils.datetime_utils import DayLike
from utils.numbers import percent


@dataclass(frozen=True)
class BucketStats:
    start: date
    end: date
    total_minutes: int = 0
    total_hours: float = 0.0  # unrounded, formatting is up to the caller
    activity_count: int = 0
    category_breakdown: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "totalMinutes": self.total_minutes,
            "totalHours": self.total_hours,
            "activityCount": self.activity_count,
            "categoryStats": dict(self.category_breakdown),
        }


@dataclass(frozen=True)
class WeeklyStats(BucketStats):
    daily_stats: Tuple[BucketStats, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["dailyStats"] = [
            {"date": day.start.isoformat(), **day.to_dict()} for day in self.daily_stats
        ]
        return data


def filter_activities(
    activities: Iterable[ActivityLog], start: date, end: date
) -> List[ActivityLog]:
    """Activities whose calendar day lies in ``[start, end]``."""
    selected: List[ActivityLog] = []
    for activity in activities:
        day = activity.day
        if day is not None and start <= day <= end:
            selected.append(activity)
    return selected


def aggregate(activities: Iterable[ActivityLog], start: date, end: date) -> BucketStats:
    selected = filter_activities(activities, start, end)
    breakdown: Dict[str, int] = {}
    total = 0
    for activity in selected:
        total += activity.duration
        breakdown[activity.category] = breakdown.get(activity.category, 0) + activity.duration
    return BucketStats(
        start=start,
        end=end,
        total_minutes=total,
        total_hours=total / 60,
        activity_count=len(selected),
        category_breakdown=breakdown,
    )


def _aggregate_range(activities: Iterable[ActivityLog], rng: DateRange) -> BucketStats:
    return aggregate(activities, rng.start, rng.end)


def daily_stats(activities: Iterable[ActivityLog], reference: Optional[DayLike] = None) -> BucketStats:
    return _aggregate_range(activities, day_range(reference))


def weekly_stats(activities: Iterable[ActivityLog], reference: Optional[DayLike] = None) -> WeeklyStats:
    """Week totals plus seven daily rollups, Monday first."""
    items = list(activities)
    rng = week_range(reference)
    week = _aggregate_range(items, rng)
    days = tuple(daily_stats(items, rng.end - timedelta(days=6 - offset)) for offset in range(7))
    return WeeklyStats(
        start=week.start,
        end=week.end,
        total_minutes=week.total_minutes,
        total_hours=week.total_hours,
        activity_count=week.activity_count,
        category_breakdown=week.category_breakdown,
        daily_stats=days,
    )


def monthly_stats(activities: Iterable[ActivityLog], reference: Optional[DayLike] = None) -> BucketStats:
    return _aggregate_range(activities, month_range(reference))


def quarterly_stats(activities: Iterable[ActivityLog], reference: Optional[DayLike] = None) -> BucketStats:
    return _aggregate_range(activities, quarter_range(reference))


_FACADE = {
    Bucket.DAY: daily_stats,
    Bucket.WEEK: weekly_stats,
    Bucket.MONTH: monthly_stats,
    Bucket.QUARTER: quarterly_stats,
}


def stats_for(
    kind: Bucket | str, activities: Iterable[ActivityLog], reference: Optional[DayLike] = None
) -> BucketStats:
    return _FACADE[normalize_bucket(kind)](activities, reference)


def completion_rate(tasks: Iterable[Task]) -> int:
    """Whole percent of tasks marked done; 0 for an empty list."""
    items = list(tasks)
    done = sum(1 for task in items if task.completed)
    return percent(done, len(items))


__all__ = [
    "BucketStats",
    "WeeklyStats",
    "aggregate",
    "completion_rate",
    "daily_stats",
    "filter_activities",
    "monthly_stats",
    "quarterly_stats",
    "stats_for",
    "weekly_stats",
]
