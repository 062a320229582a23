from datetime import date
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.settings import TRACKER
from models import ActivityLog, Task
from services.completions import CompletionTracker, is_synthetic

TASKS = [Task(id="t1", name="Run", category="Gym"), Task(id="t2", name="Read", category="Reading Book")]


def _activity(idx, task_id, day, duration=30, notes=None):
    return ActivityLog(
        id=f"a{idx}",
        task_id=task_id,
        task_name="Run",
        category="Gym",
        date=day,
        duration=duration,
        notes=notes,
    )


def test_derivation_collapses_duplicates():
    activities = [
        _activity(1, "t1", "2024-03-04"),
        _activity(2, "t1", "2024-03-04", duration=90),
        _activity(3, "t2", "2024-03-04"),
    ]
    tracker = CompletionTracker.from_activities(activities)
    assert len(tracker) == 2
    assert tracker.completed_keys() == [("t1", "2024-03-04"), ("t2", "2024-03-04")]
    assert tracker.is_completed("t1", date(2024, 3, 4))
    assert not tracker.is_completed("t1", "2024-03-05")


def test_toggle_creates_then_removes_synthetic_activity():
    tracker = CompletionTracker.from_activities([])
    first = tracker.toggle("t1", "2024-03-04", [], TASKS)

    assert first.completed is True
    assert len(first.activities) == 1
    created = first.activities[0]
    assert created is first.created
    assert created.duration == 60
    assert created.task_name == "Run"
    assert created.category == "Gym"
    assert created.date == "2024-03-04"
    assert is_synthetic(created)
    assert first.tracker.is_completed("t1", "2024-03-04")

    second = first.tracker.toggle("t1", "2024-03-04", first.activities, TASKS)
    assert second.completed is False
    assert second.activities == []
    assert second.removed == (created,)
    assert not second.tracker.is_completed("t1", "2024-03-04")


def test_double_toggle_restores_previous_state():
    manual = [_activity(1, "t2", "2024-03-05")]
    tracker = CompletionTracker.from_activities(manual)
    once = tracker.toggle("t1", "2024-03-04", manual, TASKS)
    twice = once.tracker.toggle("t1", "2024-03-04", once.activities, TASKS)
    assert twice.activities == manual
    assert twice.tracker.completed_keys() == tracker.completed_keys()


def test_toggle_on_with_existing_activity_adds_nothing():
    existing = [_activity(1, "t1", "2024-03-04", duration=45, notes="morning run")]
    # a false entry can exist after an untick that was not yet rebuilt from the log
    tracker = CompletionTracker.from_activities(existing).with_state("t1", "2024-03-04", False)
    result = tracker.toggle("t1", "2024-03-04", existing, TASKS)
    assert result.completed is True
    assert result.created is None
    assert result.activities == existing


def test_rebuilt_tracker_matches_toggle_result():
    existing = [_activity(1, "t1", "2024-03-04")]
    tracker = CompletionTracker.from_activities(existing)
    result = tracker.toggle("t2", "2024-03-04", existing, TASKS)
    rebuilt = CompletionTracker.from_activities(result.activities)
    assert rebuilt.completed_keys() == result.tracker.completed_keys()


def test_untick_removes_manual_entries_too():
    activities = [
        _activity(1, "t1", "2024-03-04", duration=45, notes="manual"),
        _activity(2, "t1", "2024-03-04", duration=20),
        _activity(3, "t1", "2024-03-05"),
    ]
    tracker = CompletionTracker.from_activities(activities)
    result = tracker.toggle("t1", "2024-03-04", activities, TASKS)
    assert result.completed is False
    assert [a.id for a in result.activities] == ["a3"]
    assert len(result.removed) == 2


def test_toggle_does_not_mutate_inputs():
    activities = [_activity(1, "t1", "2024-03-04")]
    snapshot = list(activities)
    tracker = CompletionTracker.from_activities(activities)
    tracker.toggle("t2", "2024-03-06", activities, TASKS)
    tracker.toggle("t1", "2024-03-04", activities, TASKS)
    assert activities == snapshot
    assert tracker.is_completed("t1", "2024-03-04")
    assert not tracker.is_completed("t2", "2024-03-06")


def test_unknown_task_id_creates_orphan_activity():
    result = CompletionTracker().toggle("ghost", date(2024, 3, 4), [], TASKS)
    assert result.completed is True
    assert result.created.task_id == "ghost"
    assert result.created.task_name == ""
    assert result.created.notes == TRACKER.synthetic_note


def test_counting_helpers():
    activities = [
        _activity(1, "t1", "2024-03-04"),
        _activity(2, "t2", "2024-03-04"),
        _activity(3, "t1", "2024-03-06"),
        _activity(4, "t1", "2024-04-01"),
    ]
    tracker = CompletionTracker.from_activities(activities)
    assert tracker.completed_on("2024-03-04") == 2
    assert tracker.count_between(date(2024, 3, 1), date(2024, 3, 31)) == 3
    assert tracker.count_between(date(2024, 3, 1), date(2024, 3, 31), task_id="t1") == 2
