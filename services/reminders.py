"""Decide when the weekly reminder/report emails are due and send them."""
from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from core.log import get_logger
from core.settings import REMINDERS
from utils.datetime_utils import local_now

logger = get_logger("reminders")

MONDAY = 0
SUNDAY = 6


def _as_aware(moment: datetime) -> datetime:
    # naive values are read as local wall-clock time
    return moment if moment.tzinfo is not None else moment.astimezone()


def _is_due(now: datetime, last_sent: Optional[datetime], weekday: int) -> bool:
    if last_sent is None:
        return True
    current = _as_aware(now)
    last = _as_aware(last_sent).astimezone(current.tzinfo)
    if last.date() == current.date():
        return False
    if current.weekday() == weekday:
        return True
    return (current - last).days >= REMINDERS.resend_after_days


def reminder_due(now: datetime, last_sent: Optional[datetime]) -> bool:
    """Mondays, or once a week has passed since the last reminder."""
    return _is_due(now, last_sent, MONDAY)


def report_due(now: datetime, last_sent: Optional[datetime]) -> bool:
    """Sundays, or once a week has passed since the last report."""
    return _is_due(now, last_sent, SUNDAY)


class ReminderScheduler:
    """Runs :meth:`check` now and then every ``interval_sec`` while started.

    ``session`` supplies ``settings``, ``last_sent``/``mark_sent`` and the two
    ``send_weekly_*`` calls. Only the last-sent stamps are written here.
    """

    def __init__(self, session, *, interval_sec: int = REMINDERS.interval_sec):
        self.session = session
        self.interval_sec = interval_sec
        self._task: Any = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def check(self, now: Optional[datetime] = None) -> Dict[str, bool]:
        moment = now or local_now()
        settings = self.session.settings
        sent = {"reminder": False, "report": False}
        if not settings.email:
            return sent

        if settings.weekly_reminder_enabled and reminder_due(moment, self.session.last_sent("reminder")):
            if self.session.send_weekly_reminder(now=moment):
                self.session.mark_sent("reminder", moment)
                sent["reminder"] = True

        if settings.weekly_report_enabled and report_due(moment, self.session.last_sent("report")):
            if self.session.send_weekly_report(now=moment):
                self.session.mark_sent("report", moment)
                sent["report"] = True
        return sent

    async def _loop(self) -> None:
        while self._running:
            try:
                await asyncio.to_thread(self.check)
            except Exception:
                logger.exception("Reminder check failed")
            await asyncio.sleep(self.interval_sec)

    def start(self, run_task: Callable[..., Any]) -> None:
        """Schedule the loop with ``run_task`` (e.g. ``page.run_task``)."""
        if not REMINDERS.enabled or self._running:
            return
        self._running = True
        self._task = run_task(self._loop)
        logger.debug("Reminder loop started, interval %ss", self.interval_sec)

    def stop(self) -> None:
        self._running = False
        task, self._task = self._task, None
        if task is not None and hasattr(task, "cancel"):
            task.cancel()


__all__ = ["ReminderScheduler", "reminder_due", "report_due"]
