# tracker/models/task.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Mapping, Optional
import uuid

from core.priorities import DEFAULT_PRIORITY, Priority, normalize_priority
from utils.datetime_utils import to_iso, utc_now
from utils.numbers import coerce_int


def new_id() -> str:
    return uuid.uuid4().hex


def _now_iso() -> str:
    return to_iso(utc_now())


@dataclass(frozen=True)
class Task:
    id: str
    name: str
    category: str = ""
    priority: Priority = DEFAULT_PRIORITY
    created_at: str = field(default_factory=_now_iso)
    completed: bool = False
    completed_at: Optional[str] = None
    goal: Optional[int] = None  # target completion-days per month, display only

    def with_completed(self, completed: bool, now: Optional[datetime] = None) -> "Task":
        """``completed`` and ``completed_at`` always change together."""
        if completed:
            return replace(self, completed=True, completed_at=to_iso(now or utc_now()))
        return replace(self, completed=False, completed_at=None)

    def monthly_goal(self, days_in_month: int) -> int:
        return self.goal if self.goal else days_in_month

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "priority": self.priority.value,
            "createdAt": self.created_at,
            "completed": self.completed,
        }
        if self.completed_at:
            data["completedAt"] = self.completed_at
        if self.goal is not None:
            data["goal"] = self.goal
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Task":
        task_id = data.get("id")
        if not task_id:
            raise ValueError("Task record without id")
        return cls(
            id=str(task_id),
            name=str(data.get("name") or ""),
            category=str(data.get("category") or ""),
            priority=normalize_priority(data.get("priority")),
            created_at=str(data.get("createdAt") or _now_iso()),
            completed=bool(data.get("completed", False)),
            completed_at=data.get("completedAt") or None,
            goal=coerce_int(data.get("goal"), None, minimum=1),
        )


__all__ = ["Task", "new_id"]
