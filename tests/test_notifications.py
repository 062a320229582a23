from datetime import datetime
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import requests

from core.settings import EMAIL
from models import ActivityLog, Task, UserSettings
from services.notifications import (
    EmailClient,
    build_reminder_params,
    build_report_params,
    send_weekly_reminder,
    send_weekly_report,
)

CONFIGURED = UserSettings(
    email="me@example.com",
    email_service_id="svc",
    email_template_id="tpl",
    email_public_key="pub",
    weekly_reminder_enabled=True,
    weekly_report_enabled=True,
)


class FakeResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeHttp:
    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse()
        self.error = error
        self.calls = []

    def post(self, url, json=None, timeout=None):
        self.calls.append({"url": url, "json": json, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


def _activity(idx, day, duration, category):
    return ActivityLog(
        id=f"a{idx}", task_id="t1", task_name="Run", category=category, date=day, duration=duration
    )


def test_report_params_cover_current_week():
    activities = [
        _activity(1, "2024-03-04", 90, "Gym"),
        _activity(2, "2024-03-06", 30, "Learning"),
        _activity(3, "2024-02-28", 500, "Gym"),
    ]
    tasks = [Task(id="t1", name="Run", completed=True), Task(id="t2", name="Read")]
    params = build_report_params(activities, tasks, CONFIGURED, datetime(2024, 3, 6).date())
    assert params["to_email"] == "me@example.com"
    assert params["week_start"] == "2024-03-04"
    assert params["week_end"] == "2024-03-10"
    assert params["total_hours"] == "2.0"
    assert params["total_activities"] == 2
    assert params["completed_tasks"] == 1
    assert params["pending_tasks"] == 1
    assert params["completion_rate"] == 50
    assert params["category_breakdown"] == "Gym: 1.5h, Learning: 0.5h"


def test_reminder_params_list_pending_names():
    tasks = [Task(id=f"t{i}", name=f"Task {i}") for i in range(7)]
    params = build_reminder_params(tasks, [], CONFIGURED, datetime(2024, 3, 4).date())
    assert params["pending_tasks_count"] == 7
    assert params["pending_tasks"] == "Task 0, Task 1, Task 2, Task 3, Task 4"
    assert params["logged_today"] == "No"

    logged = [_activity(1, "2024-03-04", 30, "Gym")]
    params = build_reminder_params(tasks, logged, CONFIGURED, datetime(2024, 3, 4).date())
    assert params["logged_today"] == "Yes"


def test_send_posts_provider_payload():
    http = FakeHttp()
    client = EmailClient(http)
    assert send_weekly_report([], [], CONFIGURED, client=client, now=datetime(2024, 3, 10, 9))
    (call,) = http.calls
    assert call["url"] == EMAIL.endpoint
    assert call["timeout"] == EMAIL.timeout_sec
    payload = call["json"]
    assert payload["service_id"] == "svc"
    assert payload["template_id"] == "tpl"
    assert payload["user_id"] == "pub"
    assert payload["template_params"]["week_start"] == "2024-03-04"


def test_missing_settings_skip_sending():
    http = FakeHttp()
    incomplete = UserSettings(email="me@example.com", email_service_id="svc")
    assert send_weekly_reminder([], [], incomplete, client=EmailClient(http)) is False
    assert send_weekly_report([], [], UserSettings(), client=EmailClient(http)) is False
    assert http.calls == []


def test_transport_errors_return_false():
    down = EmailClient(FakeHttp(error=requests.ConnectionError("offline")))
    assert send_weekly_reminder([], [], CONFIGURED, client=down) is False

    rejected = EmailClient(FakeHttp(response=FakeResponse(400)))
    assert send_weekly_report([], [], CONFIGURED, client=rejected) is False
