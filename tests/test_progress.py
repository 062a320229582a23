from datetime import date, timedelta
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from models import ActivityLog, Task
from services.completions import CompletionTracker
from services.date_ranges import month_days
from services.progress import (
    month_weeks,
    monthly_progress,
    summarize_month,
    task_progress,
    top_tasks,
    trend,
    weekly_progress,
)


def _tracker(pairs):
    activities = [
        ActivityLog(id=f"a{i}", task_id=task_id, task_name="", category="", date=day, duration=60)
        for i, (task_id, day) in enumerate(pairs)
    ]
    return CompletionTracker.from_activities(activities)


@pytest.mark.parametrize("year", [2023, 2024, 2025])
def test_weeks_cover_each_month_exactly(year):
    for month in range(1, 13):
        weeks = month_weeks(year, month)
        covered = [day for week in weeks for day in week.days]
        assert covered == month_days(year, month)
        assert all(1 <= len(week.days) <= 7 for week in weeks)
        assert all(week.start.weekday() == 0 for week in weeks[1:])
        assert [w.number for w in weeks] == list(range(1, len(weeks) + 1))


def test_march_2024_partition():
    weeks = month_weeks(2024, 3)
    assert [len(w.days) for w in weeks] == [3, 7, 7, 7, 7]
    assert weeks[0].start == date(2024, 3, 1)
    assert weeks[-1].end == date(2024, 3, 31)


def test_month_starting_saturday_needs_six_weeks():
    weeks = month_weeks(2025, 3)
    assert len(weeks) == 6
    assert weeks[-1].days == (date(2025, 3, 31),)


def test_weekly_progress_counts_clipped_days():
    tasks = [Task(id="t1", name="Run"), Task(id="t2", name="Read")]
    tracker = _tracker(
        [
            ("t1", "2024-03-01"),
            ("t2", "2024-03-02"),
            ("t1", "2024-02-29"),  # same calendar week, previous month
            ("t1", "2024-03-05"),
        ]
    )
    weeks = month_weeks(2024, 3)
    progress = weekly_progress(tasks, weeks, tracker)
    first = progress[0]
    assert first.total == 6
    assert first.completed == 2
    assert first.left == 4
    assert first.percentage == 33
    assert [d.completed for d in first.daily] == [1, 1, 0]
    assert all(d.total == 2 for d in first.daily)
    assert progress[1].completed == 1


def test_weekly_progress_counts_completions_of_deleted_tasks():
    tasks = [Task(id="t1", name="Run")]
    # t2 and t3 were deleted; their activities stay in the log
    tracker = _tracker(
        [("t1", "2024-03-01"), ("t1", "2024-03-02"), ("t1", "2024-03-03"), ("t2", "2024-03-01"), ("t3", "2024-03-02")]
    )
    first = weekly_progress(tasks, month_weeks(2024, 3), tracker)[0]
    assert first.total == 3
    assert first.completed == 5
    assert first.left == -2
    assert first.percentage == 167


def test_weekly_progress_without_tasks():
    weeks = month_weeks(2024, 3)
    progress = weekly_progress([], weeks, _tracker([("t1", "2024-03-04")]))
    assert progress[1].total == 0
    assert progress[1].percentage == 0


def test_monthly_progress_is_scoped_to_month():
    tasks = [Task(id="t1", name="Run"), Task(id="t2", name="Read")]
    tracker = _tracker([("t1", "2024-03-04"), ("t2", "2024-03-31"), ("t1", "2024-04-01")])
    progress = monthly_progress(tasks, month_days(2024, 3), tracker)
    assert progress.total == 62
    assert progress.completed == 2
    assert progress.left == 60
    assert progress.percentage == 3


def test_task_percentage_ignores_goal():
    task = Task(id="t1", name="Run", goal=20)
    days = month_days(2024, 3)
    tracker = _tracker([("t1", days[i].isoformat()) for i in range(15)])
    (progress,) = task_progress([task], days, tracker)
    assert progress.completed == 15
    assert progress.left == 16
    assert progress.percentage == 48  # round(15 / 31 * 100)
    assert progress.goal == 20


def test_task_goal_defaults_to_days_in_month():
    (progress,) = task_progress([Task(id="t1", name="Run")], month_days(2024, 2), _tracker([]))
    assert progress.goal == 29
    assert progress.percentage == 0


def test_trend_covers_thirty_days_ending_today():
    tasks = [Task(id="t1", name="Run"), Task(id="t2", name="Read"), Task(id="t3", name="Code")]
    today = date(2024, 3, 10)
    tracker = _tracker([("t1", "2024-03-10"), ("t2", "2024-03-10"), ("t1", "2024-02-10"), ("t3", "2024-02-09")])
    points = trend(tasks, tracker, today=today)
    assert len(points) == 30
    assert points[0].date == today - timedelta(days=29)
    assert points[-1].date == today
    assert points[-1].percentage == 67
    assert points[0].date == date(2024, 2, 10)
    assert points[0].percentage == 33
    assert [p.date for p in points] == sorted(p.date for p in points)


def test_top_tasks_stable_and_truncated():
    tasks = [Task(id=f"t{i}", name=f"Task {i}") for i in range(12)]
    pairs = [("t5", "2024-03-01"), ("t5", "2024-03-02"), ("t3", "2024-03-01"), ("t8", "2024-03-01")]
    progress = task_progress(tasks, month_days(2024, 3), _tracker(pairs))
    top = top_tasks(progress)
    assert len(top) == 10
    assert [p.task.id for p in top[:4]] == ["t5", "t3", "t8", "t0"]


def test_summarize_month_composes_everything():
    tasks = [Task(id="t1", name="Run")]
    summary = summarize_month(tasks, _tracker([("t1", "2024-03-04")]), 2024, 3, today=date(2024, 3, 10))
    assert summary.monthly.completed == 1
    assert len(summary.days) == 31
    assert len(summary.weekly) == len(summary.weeks) == 5
    assert summary.tasks[0].completed == 1
    assert summary.top[0].task.id == "t1"
    assert summary.trend[-1].date == date(2024, 3, 10)
