"""Per-day habit completions derived from the activity log.

The mapping is never edited in place by callers: it is rebuilt from the
activity log in one pass whenever the log changes, and ``toggle`` hands back
the new activity log together with the tracker that matches it.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from core.settings import TRACKER
from models import ActivityLog, Task
from models.task import new_id
from utils.datetime_utils import DayLike, format_day, parse_day

CompletionKey = Tuple[str, str]  # (task id, YYYY-MM-DD)


@dataclass(frozen=True)
class ToggleResult:
    tracker: "CompletionTracker"
    activities: List[ActivityLog]
    completed: bool
    created: Optional[ActivityLog] = None
    removed: Tuple[ActivityLog, ...] = ()


class CompletionTracker:
    def __init__(self, entries: Optional[Mapping[CompletionKey, bool]] = None):
        self._entries: Dict[CompletionKey, bool] = dict(entries or {})

    @classmethod
    def from_activities(cls, activities: Iterable[ActivityLog]) -> "CompletionTracker":
        """One entry per (task, day); later duplicates are ignored."""
        entries: Dict[CompletionKey, bool] = {}
        for activity in activities:
            key = (activity.task_id, activity.date)
            if key not in entries:
                entries[key] = True
        return cls(entries)

    # ---------- queries ----------
    def is_completed(self, task_id: str, day: DayLike) -> bool:
        return self._entries.get((task_id, format_day(day)), False)

    def completed_keys(self) -> List[CompletionKey]:
        return [key for key, done in self._entries.items() if done]

    def __iter__(self) -> Iterator[CompletionKey]:
        return iter(self.completed_keys())

    def __len__(self) -> int:
        return len(self.completed_keys())

    def completed_on(self, day: DayLike) -> int:
        """Number of tasks ticked on ``day``."""
        key_day = format_day(day)
        return sum(1 for _, entry_day in self.completed_keys() if entry_day == key_day)

    def count_between(self, start: date, end: date, task_id: Optional[str] = None) -> int:
        total = 0
        for entry_task, entry_day in self.completed_keys():
            if task_id is not None and entry_task != task_id:
                continue
            parsed = parse_day(entry_day)
            if parsed is not None and start <= parsed <= end:
                total += 1
        return total

    def with_state(self, task_id: str, day: DayLike, completed: bool) -> "CompletionTracker":
        entries = dict(self._entries)
        entries[(task_id, format_day(day))] = completed
        return CompletionTracker(entries)

    # ---------- toggle ----------
    def toggle(
        self,
        task_id: str,
        day: DayLike,
        activities: Sequence[ActivityLog],
        tasks: Iterable[Task] = (),
    ) -> ToggleResult:
        """Flip completion for ``(task_id, day)`` and return the new log with it.

        Ticking adds a synthetic activity only when nothing is logged for that
        task and day yet. Unticking removes every activity for the pair,
        including time logged by hand.
        """
        key_day = format_day(day)
        if self.is_completed(task_id, key_day):
            kept = [a for a in activities if not a.matches(task_id, key_day)]
            removed = tuple(a for a in activities if a.matches(task_id, key_day))
            return ToggleResult(
                tracker=self.with_state(task_id, key_day, False),
                activities=kept,
                completed=False,
                removed=removed,
            )

        updated = list(activities)
        created: Optional[ActivityLog] = None
        if not any(a.matches(task_id, key_day) for a in activities):
            task = next((t for t in tasks if t.id == task_id), None)
            created = ActivityLog(
                id=new_id(),
                task_id=task_id,
                task_name=task.name if task else "",
                category=task.category if task else "",
                date=key_day,
                duration=TRACKER.synthetic_duration_minutes,
                notes=TRACKER.synthetic_note,
            )
            updated.append(created)
        return ToggleResult(
            tracker=self.with_state(task_id, key_day, True),
            activities=updated,
            completed=True,
            created=created,
        )


def is_synthetic(activity: ActivityLog) -> bool:
    return activity.notes == TRACKER.synthetic_note


__all__ = ["CompletionKey", "CompletionTracker", "ToggleResult", "is_synthetic"]
