"""Utility helpers for task priorities."""
from __future__ import annotations

from enum import Enum
from typing import Dict


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# low < medium < high < critical; rank drives sorting in the task list.
PRIORITY_META: Dict[Priority, Dict[str, object]] = {
    Priority.LOW: {
        "label": "Low",
        "rank": 1,
        "color": "#1F2937",    # gray-800
        "bgcolor": "#F3F4F6",  # gray-100
    },
    Priority.MEDIUM: {
        "label": "Medium",
        "rank": 2,
        "color": "#1E40AF",    # blue-800
        "bgcolor": "#DBEAFE",  # blue-100
    },
    Priority.HIGH: {
        "label": "High",
        "rank": 3,
        "color": "#9A3412",    # orange-800
        "bgcolor": "#FFEDD5",  # orange-100
    },
    Priority.CRITICAL: {
        "label": "Critical",
        "rank": 4,
        "color": "#991B1B",    # red-800
        "bgcolor": "#FEE2E2",  # red-100
    },
}

DEFAULT_PRIORITY = Priority.MEDIUM


def normalize_priority(value: Priority | str | None) -> Priority:
    """Map external values onto a supported priority, defaulting to medium."""
    if isinstance(value, Priority):
        return value
    if value is None:
        return DEFAULT_PRIORITY
    try:
        return Priority(str(value).strip().lower())
    except ValueError:
        return DEFAULT_PRIORITY


def priority_rank(value: Priority | str | None) -> int:
    return int(PRIORITY_META[normalize_priority(value)]["rank"])


def priority_label(value: Priority | str | None) -> str:
    return str(PRIORITY_META[normalize_priority(value)]["label"])


def priority_color(value: Priority | str | None) -> str:
    return str(PRIORITY_META[normalize_priority(value)]["color"])


def priority_bgcolor(value: Priority | str | None) -> str:
    return str(PRIORITY_META[normalize_priority(value)]["bgcolor"])


def priority_options() -> Dict[str, str]:
    """Return mapping of dropdown values -> labels."""
    return {level.value: str(meta["label"]) for level, meta in PRIORITY_META.items()}


__all__ = [
    "DEFAULT_PRIORITY",
    "PRIORITY_META",
    "Priority",
    "normalize_priority",
    "priority_bgcolor",
    "priority_color",
    "priority_label",
    "priority_options",
    "priority_rank",
]
