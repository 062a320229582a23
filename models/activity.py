# tracker/models/activity.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Mapping, Optional

from utils.datetime_utils import DayLike, format_day, parse_day
from utils.numbers import coerce_int


@dataclass(frozen=True)
class ActivityLog:
    """Time logged against a task on one calendar day.

    ``task_name`` and ``category`` are copies taken when the record was
    created; later task edits do not touch them.
    """

    id: str
    task_id: str
    task_name: str
    category: str
    date: str  # YYYY-MM-DD
    duration: int  # minutes
    notes: Optional[str] = None

    @property
    def day(self) -> Optional[date]:
        return parse_day(self.date)

    def matches(self, task_id: str, day: DayLike) -> bool:
        return self.task_id == task_id and self.date == format_day(day)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "taskId": self.task_id,
            "taskName": self.task_name,
            "category": self.category,
            "date": self.date,
            "duration": self.duration,
        }
        if self.notes is not None:
            data["notes"] = self.notes
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ActivityLog":
        activity_id = data.get("id")
        task_id = data.get("taskId")
        if not activity_id or not task_id:
            raise ValueError("Activity record without id or taskId")
        day = parse_day(data.get("date"))
        if day is None:
            raise ValueError(f"Activity {activity_id} has no valid date")
        return cls(
            id=str(activity_id),
            task_id=str(task_id),
            task_name=str(data.get("taskName") or ""),
            category=str(data.get("category") or ""),
            date=day.isoformat(),
            duration=coerce_int(data.get("duration"), 0, minimum=0),
            notes=data.get("notes"),
        )


__all__ = ["ActivityLog"]
