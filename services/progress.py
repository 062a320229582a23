"""Month habit-grid summaries: weeks, whole month, per task and 30-day trend."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional, Sequence, Tuple

from core.settings import TRACKER
from models import Task
from services.completions import CompletionTracker
from services.date_ranges import month_days, week_range
from utils.datetime_utils import local_today
from utils.numbers import percent


@dataclass(frozen=True)
class CalendarWeek:
    number: int
    days: Tuple[date, ...]  # clipped to the month

    @property
    def start(self) -> date:
        return self.days[0]

    @property
    def end(self) -> date:
        return self.days[-1]


@dataclass(frozen=True)
class Progress:
    completed: int
    left: int
    total: int
    percentage: int


@dataclass(frozen=True)
class DayProgress:
    date: date
    completed: int
    total: int


@dataclass(frozen=True)
class WeekProgress(Progress):
    number: int = 0
    daily: Tuple[DayProgress, ...] = ()


@dataclass(frozen=True)
class TaskProgress:
    task: Task
    completed: int
    left: int
    percentage: int
    goal: int  # shown next to the bar, not used in the percentage


@dataclass(frozen=True)
class TrendPoint:
    date: date
    completed: int
    percentage: int


@dataclass(frozen=True)
class MonthSummary:
    year: int
    month: int
    days: Tuple[date, ...]
    weeks: Tuple[CalendarWeek, ...]
    weekly: Tuple[WeekProgress, ...]
    monthly: Progress
    tasks: Tuple[TaskProgress, ...]
    top: Tuple[TaskProgress, ...]
    trend: Tuple[TrendPoint, ...]


def month_weeks(year: int, month: int) -> List[CalendarWeek]:
    """Monday-start weeks of a month, first and last clipped to the month."""
    days = month_days(year, month)
    first, last = days[0], days[-1]
    weeks: List[CalendarWeek] = []
    week_start = week_range(first).start
    while week_start <= last and len(weeks) < TRACKER.max_weeks_per_month:
        week_end = week_start + timedelta(days=6)
        clipped = tuple(d for d in days if week_start <= d <= week_end)
        if clipped:
            weeks.append(CalendarWeek(number=len(weeks) + 1, days=clipped))
        week_start += timedelta(days=7)
    return weeks


def _day_progress(tasks: Sequence[Task], tracker: CompletionTracker, day: date) -> DayProgress:
    return DayProgress(date=day, completed=tracker.completed_on(day), total=len(tasks))


def weekly_progress(
    tasks: Sequence[Task], weeks: Sequence[CalendarWeek], tracker: CompletionTracker
) -> List[WeekProgress]:
    result: List[WeekProgress] = []
    for week in weeks:
        total = len(tasks) * len(week.days)
        # counts every completion in the week, including ids of deleted tasks,
        # so percentage can pass 100 and left can go negative
        completed = tracker.count_between(week.start, week.end)
        result.append(
            WeekProgress(
                completed=completed,
                left=total - completed,
                total=total,
                percentage=percent(completed, total),
                number=week.number,
                daily=tuple(_day_progress(tasks, tracker, day) for day in week.days),
            )
        )
    return result


def monthly_progress(
    tasks: Sequence[Task], days: Sequence[date], tracker: CompletionTracker
) -> Progress:
    total = len(tasks) * len(days)
    completed = tracker.count_between(days[0], days[-1]) if days else 0
    return Progress(
        completed=completed,
        left=total - completed,
        total=total,
        percentage=percent(completed, total),
    )


def task_progress(
    tasks: Sequence[Task], days: Sequence[date], tracker: CompletionTracker
) -> List[TaskProgress]:
    day_count = len(days)
    result: List[TaskProgress] = []
    for task in tasks:
        completed = tracker.count_between(days[0], days[-1], task_id=task.id) if days else 0
        result.append(
            TaskProgress(
                task=task,
                completed=completed,
                left=day_count - completed,
                percentage=percent(completed, day_count),
                goal=task.monthly_goal(day_count),
            )
        )
    return result


def trend(
    tasks: Sequence[Task],
    tracker: CompletionTracker,
    today: Optional[date] = None,
    days: int = TRACKER.trend_days,
) -> List[TrendPoint]:
    """Daily completion percentage for the ``days`` days ending ``today``."""
    end = today or local_today()
    points: List[TrendPoint] = []
    for offset in range(days - 1, -1, -1):
        day = end - timedelta(days=offset)
        completed = tracker.completed_on(day)
        points.append(TrendPoint(date=day, completed=completed, percentage=percent(completed, len(tasks))))
    return points


def top_tasks(progress: Sequence[TaskProgress], limit: int = TRACKER.top_tasks_limit) -> List[TaskProgress]:
    # sorted() is stable, so ties keep task order
    return sorted(progress, key=lambda item: item.completed, reverse=True)[:limit]


def summarize_month(
    tasks: Sequence[Task],
    tracker: CompletionTracker,
    year: int,
    month: int,
    today: Optional[date] = None,
) -> MonthSummary:
    days = month_days(year, month)
    weeks = month_weeks(year, month)
    per_task = task_progress(tasks, days, tracker)
    return MonthSummary(
        year=year,
        month=month,
        days=tuple(days),
        weeks=tuple(weeks),
        weekly=tuple(weekly_progress(tasks, weeks, tracker)),
        monthly=monthly_progress(tasks, days, tracker),
        tasks=tuple(per_task),
        top=tuple(top_tasks(per_task)),
        trend=tuple(trend(tasks, tracker, today)),
    )


__all__ = [
    "CalendarWeek",
    "DayProgress",
    "MonthSummary",
    "Progress",
    "TaskProgress",
    "TrendPoint",
    "WeekProgress",
    "month_weeks",
    "monthly_progress",
    "summarize_month",
    "task_progress",
    "top_tasks",
    "trend",
    "weekly_progress",
]
