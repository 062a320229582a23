"""Weekly report and reminder emails sent through the EmailJS REST API."""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Iterable, Optional, Sequence

import requests

from core.log import get_logger
from core.settings import EMAIL, TRACKER
from models import ActivityLog, Task, UserSettings
from services.records import activities_on
from services.stats import completion_rate, weekly_stats
from utils.datetime_utils import local_today

logger = get_logger("notify")


class EmailClient:
    """Thin wrapper over ``POST /api/v1.0/email/send``."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        *,
        endpoint: str = EMAIL.endpoint,
        timeout: float = EMAIL.timeout_sec,
    ):
        self.session = session or requests.Session()
        self.endpoint = endpoint
        self.timeout = timeout

    def send(self, settings: UserSettings, params: Dict[str, Any]) -> None:
        payload = {
            "service_id": settings.email_service_id,
            "template_id": settings.email_template_id,
            "user_id": settings.email_public_key,
            "template_params": params,
        }
        response = self.session.post(self.endpoint, json=payload, timeout=self.timeout)
        response.raise_for_status()


def format_category_breakdown(breakdown: Dict[str, int]) -> str:
    return ", ".join(f"{name}: {minutes / 60:.1f}h" for name, minutes in breakdown.items())


def build_report_params(
    activities: Sequence[ActivityLog],
    tasks: Sequence[Task],
    settings: UserSettings,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    stats = weekly_stats(activities, today or local_today())
    completed = sum(1 for t in tasks if t.completed)
    return {
        "to_email": settings.email,
        "week_start": stats.daily_stats[0].start.isoformat(),
        "week_end": stats.daily_stats[-1].start.isoformat(),
        "total_hours": f"{stats.total_hours:.1f}",
        "total_activities": stats.activity_count,
        "completed_tasks": completed,
        "pending_tasks": len(tasks) - completed,
        "completion_rate": completion_rate(tasks),
        "category_breakdown": format_category_breakdown(stats.category_breakdown),
    }


def build_reminder_params(
    tasks: Iterable[Task],
    activities: Iterable[ActivityLog],
    settings: UserSettings,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    pending = [t for t in tasks if not t.completed]
    logged_today = bool(activities_on(activities, today or local_today()))
    return {
        "to_email": settings.email,
        "pending_tasks_count": len(pending),
        "pending_tasks": ", ".join(t.name for t in pending[: TRACKER.reminder_pending_names]),
        "logged_today": "Yes" if logged_today else "No",
        "reminder_message": (
            "Great job logging today! Keep it up!"
            if logged_today
            else "Don't forget to log your activities today!"
        ),
    }


def _deliver(kind: str, settings: UserSettings, params: Dict[str, Any], client: Optional[EmailClient]) -> bool:
    try:
        (client or EmailClient()).send(settings, params)
    except requests.RequestException as exc:
        logger.error("Failed to send weekly %s: %s", kind, exc)
        return False
    logger.info("Weekly %s sent to %s", kind, settings.email)
    return True


def send_weekly_report(
    activities: Sequence[ActivityLog],
    tasks: Sequence[Task],
    settings: UserSettings,
    *,
    client: Optional[EmailClient] = None,
    now: Optional[datetime] = None,
) -> bool:
    if not settings.email_configured:
        logger.warning("Email settings not configured, weekly report skipped")
        return False
    params = build_report_params(activities, tasks, settings, now.date() if now else None)
    return _deliver("report", settings, params, client)


def send_weekly_reminder(
    tasks: Sequence[Task],
    activities: Sequence[ActivityLog],
    settings: UserSettings,
    *,
    client: Optional[EmailClient] = None,
    now: Optional[datetime] = None,
) -> bool:
    if not settings.email_configured:
        logger.warning("Email settings not configured, weekly reminder skipped")
        return False
    params = build_reminder_params(tasks, activities, settings, now.date() if now else None)
    return _deliver("reminder", settings, params, client)


__all__ = [
    "EmailClient",
    "build_reminder_params",
    "build_report_params",
    "format_category_breakdown",
    "send_weekly_reminder",
    "send_weekly_report",
]
