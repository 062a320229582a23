# tracker/models/category.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from utils.datetime_utils import to_iso, utc_now

# palette offered when creating a category
CATEGORY_COLORS = (
    "#ef4444",  # red
    "#3b82f6",  # blue
    "#10b981",  # green
    "#f59e0b",  # amber
    "#8b5cf6",  # purple
    "#ec4899",  # pink
    "#06b6d4",  # cyan
    "#84cc16",  # lime
    "#f97316",  # orange
    "#6366f1",  # indigo
)

# used for names that no longer match any category
UNKNOWN_CATEGORY_COLOR = "#6b7280"

_DEFAULT_SEED = (
    ("1", "Gym", "#ef4444"),
    ("2", "Office Task", "#3b82f6"),
    ("3", "Personal Task", "#10b981"),
    ("4", "Learning", "#f59e0b"),
    ("5", "Reading Book", "#8b5cf6"),
)


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    color: str = CATEGORY_COLORS[0]
    created_at: str = field(default_factory=lambda: to_iso(utc_now()))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Category":
        category_id = data.get("id")
        name = data.get("name")
        if not category_id or not name:
            raise ValueError("Category record without id or name")
        return cls(
            id=str(category_id),
            name=str(name),
            color=str(data.get("color") or UNKNOWN_CATEGORY_COLOR),
            created_at=str(data.get("createdAt") or to_iso(utc_now())),
        )


def default_categories(now: Optional[datetime] = None) -> List[Category]:
    stamp = to_iso(now or utc_now())
    return [Category(id=cid, name=name, color=color, created_at=stamp) for cid, name, color in _DEFAULT_SEED]


__all__ = ["CATEGORY_COLORS", "Category", "UNKNOWN_CATEGORY_COLOR", "default_categories"]
