"""The single owner of the tracker's collections for one running app."""
from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional

from core.log import get_logger
from models import ActivityLog, Category, Task, UserSettings
from services import records
from services.completions import CompletionTracker
from services.date_ranges import Bucket
from services.notifications import EmailClient, send_weekly_reminder, send_weekly_report
from services.progress import MonthSummary, summarize_month
from services.reminders import ReminderScheduler
from services.stats import BucketStats, completion_rate, stats_for
from utils.datetime_utils import DayLike, local_today
from storage.store import TrackerStore

logger = get_logger("session")


class TrackerSession:
    """Holds tasks, activities, categories and settings loaded from the store.

    Each mutation replaces a whole collection and writes it back before
    returning. The completion mapping is rebuilt from the activity log
    whenever that log is replaced.
    """

    def __init__(self, store: Optional[TrackerStore] = None, *, email_client: Optional[EmailClient] = None):
        self.store = store or TrackerStore()
        self.email_client = email_client
        self.tasks: List[Task] = self.store.load_tasks()
        self.activities: List[ActivityLog] = self.store.load_activities()
        self.categories: List[Category] = self.store.load_categories()
        self.settings: UserSettings = self.store.load_settings()
        self.completions = CompletionTracker.from_activities(self.activities)
        self._last_sent: Dict[str, Optional[datetime]] = {
            "reminder": self.store.get_last_sent("reminder"),
            "report": self.store.get_last_sent("report"),
        }
        self.reminders = ReminderScheduler(self)

    # ---------- write-through ----------
    def _replace_tasks(self, tasks: List[Task]) -> None:
        self.store.save_tasks(tasks)
        self.tasks = tasks

    def _replace_activities(self, activities: List[ActivityLog]) -> None:
        self.store.save_activities(activities)
        self.activities = activities
        self.completions = CompletionTracker.from_activities(activities)

    def _replace_categories(self, categories: List[Category]) -> None:
        self.store.save_categories(categories)
        self.categories = categories

    # ---------- tasks ----------
    def add_task(self, name: str, category: str = "", priority=None, goal=None) -> Task:
        tasks, task = records.create_task(self.tasks, name, category, priority, goal)
        self._replace_tasks(tasks)
        logger.debug("Task created: %s", task.id)
        return task

    def toggle_task(self, task_id: str) -> None:
        self._replace_tasks(records.toggle_task_completed(self.tasks, task_id))

    def set_task_goal(self, task_id: str, goal) -> None:
        self._replace_tasks(records.set_task_goal(self.tasks, task_id, goal))

    def delete_task(self, task_id: str) -> None:
        self._replace_tasks(records.delete_task(self.tasks, task_id))
        logger.debug("Task deleted: %s", task_id)

    def get_task(self, task_id: str) -> Optional[Task]:
        return next((t for t in self.tasks if t.id == task_id), None)

    # ---------- activities ----------
    def log_activity(self, task_id: str, day: Optional[DayLike] = None, duration=None, notes: str = "") -> ActivityLog:
        activities, activity = records.log_activity(
            self.activities, self.tasks, task_id, day, duration, notes
        )
        self._replace_activities(activities)
        return activity

    def delete_activity(self, activity_id: str) -> None:
        self._replace_activities(records.delete_activity(self.activities, activity_id))

    # ---------- categories ----------
    def add_category(self, name: str, color: Optional[str] = None) -> Category:
        categories, category = records.create_category(self.categories, name, color)
        self._replace_categories(categories)
        return category

    def delete_category(self, category_id: str) -> None:
        self._replace_categories(records.delete_category(self.categories, category_id))

    def category_color(self, name: str) -> str:
        return records.category_color(self.categories, name)

    # ---------- settings ----------
    def update_settings(self, **changes: Any) -> UserSettings:
        known = {k: v for k, v in changes.items() if hasattr(self.settings, k)}
        updated = replace(self.settings, **known)
        self.store.save_settings(updated)
        self.settings = updated
        return updated

    # ---------- habit grid ----------
    def is_completed(self, task_id: str, day: DayLike) -> bool:
        return self.completions.is_completed(task_id, day)

    def toggle_completion(self, task_id: str, day: DayLike) -> bool:
        """Tick or untick a habit; returns the new state."""
        result = self.completions.toggle(task_id, day, self.activities, self.tasks)
        self._replace_activities(result.activities)
        if result.created is not None:
            logger.debug("Synthetic activity %s for %s on %s", result.created.id, task_id, day)
        elif result.removed:
            logger.debug("Removed %d activities for %s on %s", len(result.removed), task_id, day)
        return result.completed

    # ---------- statistics ----------
    def stats(self, kind: Bucket | str, reference: Optional[DayLike] = None) -> BucketStats:
        return stats_for(kind, self.activities, reference)

    def completion_rate(self) -> int:
        return completion_rate(self.tasks)

    def month_summary(self, year: int, month: int, today: Optional[date] = None) -> MonthSummary:
        return summarize_month(self.tasks, self.completions, year, month, today or local_today())

    # ---------- notifications ----------
    def last_sent(self, kind: str) -> Optional[datetime]:
        return self._last_sent.get(kind)

    def mark_sent(self, kind: str, moment: datetime) -> None:
        self.store.set_last_sent(kind, moment)
        self._last_sent[kind] = moment

    def send_weekly_report(self, now: Optional[datetime] = None) -> bool:
        return send_weekly_report(
            self.activities, self.tasks, self.settings, client=self.email_client, now=now
        )

    def send_weekly_reminder(self, now: Optional[datetime] = None) -> bool:
        return send_weekly_reminder(
            self.tasks, self.activities, self.settings, client=self.email_client, now=now
        )

    def start_reminders(self, run_task: Callable[..., Any]) -> None:
        self.reminders.start(run_task)

    def stop_reminders(self) -> None:
        self.reminders.stop()


__all__ = ["TrackerSession"]
