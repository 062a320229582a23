# tracker/services/records.py
"""Whole-collection edits for tasks, activities and categories.

Every function takes the current snapshot and returns a new list; callers
persist the result.
"""
from __future__ import annotations

import re
from dataclasses import replace
from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Tuple

from core.priorities import Priority, normalize_priority, priority_rank
from core.settings import TRACKER
from models import ActivityLog, Category, Task
from models.category import CATEGORY_COLORS, UNKNOWN_CATEGORY_COLOR
from models.task import new_id
from utils.datetime_utils import DayLike, format_day, local_today, to_iso, utc_now
from utils.numbers import coerce_int

COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")
TASK_FILTERS = ("all", "pending", "completed")


def _clean_name(name: Optional[str], what: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValueError(f"{what} name cannot be empty")
    return cleaned


# ---------- tasks ----------
def create_task(
    tasks: Sequence[Task],
    name: str,
    category: str = "",
    priority: Priority | str | None = None,
    goal=None,
    *,
    now: Optional[datetime] = None,
) -> Tuple[List[Task], Task]:
    task = Task(
        id=new_id(),
        name=_clean_name(name, "Task"),
        category=(category or "").strip(),
        priority=normalize_priority(priority),
        created_at=to_iso(now or utc_now()),
        goal=coerce_int(goal, TRACKER.default_goal_days, minimum=1),
    )
    return [*tasks, task], task


def toggle_task_completed(
    tasks: Sequence[Task], task_id: str, *, now: Optional[datetime] = None
) -> List[Task]:
    return [t.with_completed(not t.completed, now) if t.id == task_id else t for t in tasks]


def set_task_goal(tasks: Sequence[Task], task_id: str, goal) -> List[Task]:
    updated: List[Task] = []
    for task in tasks:
        if task.id == task_id:
            # bad input keeps the previous goal
            value = coerce_int(goal, task.goal, minimum=1)
            task = replace(task, goal=value)
        updated.append(task)
    return updated


def delete_task(tasks: Sequence[Task], task_id: str) -> List[Task]:
    """Activities logged for the task stay in the log."""
    return [t for t in tasks if t.id != task_id]


def filter_tasks(tasks: Iterable[Task], status: str = "all") -> List[Task]:
    if status == "pending":
        return [t for t in tasks if not t.completed]
    if status == "completed":
        return [t for t in tasks if t.completed]
    return list(tasks)


def sort_tasks(tasks: Iterable[Task]) -> List[Task]:
    """Pending tasks first, then by priority, critical on top."""
    return sorted(tasks, key=lambda t: (t.completed, -priority_rank(t.priority)))


# ---------- activities ----------
def log_activity(
    activities: Sequence[ActivityLog],
    tasks: Sequence[Task],
    task_id: str,
    day: Optional[DayLike] = None,
    duration=None,
    notes: Optional[str] = None,
) -> Tuple[List[ActivityLog], ActivityLog]:
    task = next((t for t in tasks if t.id == task_id), None)
    if task is None:
        raise ValueError(f"Unknown task: {task_id}")
    activity = ActivityLog(
        id=new_id(),
        task_id=task.id,
        task_name=task.name,
        category=task.category,
        date=format_day(day or local_today()),
        duration=coerce_int(duration, TRACKER.default_duration_minutes, minimum=1),
        notes=(notes or "").strip(),
    )
    return [*activities, activity], activity


def delete_activity(activities: Sequence[ActivityLog], activity_id: str) -> List[ActivityLog]:
    return [a for a in activities if a.id != activity_id]


def activities_on(activities: Iterable[ActivityLog], day: DayLike) -> List[ActivityLog]:
    key_day = format_day(day)
    return [a for a in activities if a.date == key_day]


# ---------- categories ----------
def create_category(
    categories: Sequence[Category],
    name: str,
    color: Optional[str] = None,
    *,
    now: Optional[datetime] = None,
) -> Tuple[List[Category], Category]:
    cleaned = _clean_name(name, "Category")
    if color is None:
        color = CATEGORY_COLORS[len(categories) % len(CATEGORY_COLORS)]
    if not COLOR_RE.match(color):
        raise ValueError("Color must be in #RRGGBB format")
    category = Category(id=new_id(), name=cleaned, color=color.lower(), created_at=to_iso(now or utc_now()))
    return [*categories, category], category


def delete_category(categories: Sequence[Category], category_id: str) -> List[Category]:
    """Tasks and activities keep the old name and fall back to the default color."""
    return [c for c in categories if c.id != category_id]


def category_color(categories: Iterable[Category], name: str) -> str:
    for category in categories:
        if category.name == name:
            return category.color
    return UNKNOWN_CATEGORY_COLOR


__all__ = [
    "TASK_FILTERS",
    "activities_on",
    "category_color",
    "create_category",
    "create_task",
    "delete_activity",
    "delete_category",
    "delete_task",
    "filter_tasks",
    "log_activity",
    "set_task_goal",
    "sort_tasks",
    "toggle_task_completed",
]
