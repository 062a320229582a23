"""Key-value persistence for the tracker's named collections."""
from __future__ import annotations

import copy
import json
from datetime import datetime
from typing import Any, Callable, List, Optional, Type, TypeVar

from sqlmodel import Session

from core.log import get_logger
from core.settings import STORAGE_KEYS
from models import ActivityLog, Category, KeyValueSlot, Task, UserSettings
from models.category import default_categories
from storage.db import get_session
from utils.datetime_utils import parse_iso, to_iso, utc_now

logger = get_logger("store")

R = TypeVar("R", Task, ActivityLog, Category)


class KeyValueStore:
    """Whole-value get/set over the ``kv_slot`` table.

    Missing rows and payloads that are not valid JSON both read as the
    supplied default; nothing here raises on bad stored data.
    """

    def __init__(self, session_factory: Callable[[], Session] = get_session):
        self._session_factory = session_factory

    def get(self, key: str, default: Any = None) -> Any:
        with self._session_factory() as session:
            row = session.get(KeyValueSlot, key)
            payload = row.value_json if row else None
        if payload is None:
            return copy.deepcopy(default)
        try:
            return json.loads(payload)
        except json.JSONDecodeError:
            logger.warning("Slot %s holds malformed JSON, using default", key)
            return copy.deepcopy(default)

    def has(self, key: str) -> bool:
        with self._session_factory() as session:
            return session.get(KeyValueSlot, key) is not None

    def set(self, key: str, value: Any) -> None:
        payload = json.dumps(value, ensure_ascii=False)
        with self._session_factory() as session:
            row = session.get(KeyValueSlot, key)
            if row is None:
                row = KeyValueSlot(key=key, value_json=payload)
            else:
                row.value_json = payload
                row.updated_at = utc_now()
            session.add(row)
            session.commit()

    def delete(self, key: str) -> None:
        with self._session_factory() as session:
            row = session.get(KeyValueSlot, key)
            if row is not None:
                session.delete(row)
                session.commit()


class TrackerStore:
    """Typed access to the four tracker slots plus notification stamps."""

    def __init__(self, kv: Optional[KeyValueStore] = None):
        self.kv = kv or KeyValueStore()

    # ----- generic helpers -----
    def _load_records(self, key: str, record_type: Type[R], raw: Any = None) -> List[R]:
        if raw is None:
            raw = self.kv.get(key, [])
        if not isinstance(raw, list):
            logger.warning("Slot %s is not a list, using empty collection", key)
            return []
        records: List[R] = []
        for item in raw:
            if not isinstance(item, dict):
                continue
            try:
                records.append(record_type.from_dict(item))
            except (TypeError, ValueError) as exc:
                logger.warning("Skipping malformed %s record: %s", record_type.__name__, exc)
        return records

    def _save_records(self, key: str, records) -> None:
        self.kv.set(key, [record.to_dict() for record in records])

    # ----- tasks -----
    def load_tasks(self) -> List[Task]:
        return self._load_records(STORAGE_KEYS.tasks, Task)

    def save_tasks(self, tasks) -> None:
        self._save_records(STORAGE_KEYS.tasks, tasks)

    # ----- activities -----
    def load_activities(self) -> List[ActivityLog]:
        return self._load_records(STORAGE_KEYS.activities, ActivityLog)

    def save_activities(self, activities) -> None:
        self._save_records(STORAGE_KEYS.activities, activities)

    # ----- categories -----
    def load_categories(self) -> List[Category]:
        # a missing or unreadable slot both get the default seed
        raw = self.kv.get(STORAGE_KEYS.categories)
        if not isinstance(raw, list):
            seed = default_categories()
            self.save_categories(seed)
            logger.info("Seeded %d default categories", len(seed))
            return seed
        return self._load_records(STORAGE_KEYS.categories, Category, raw)

    def save_categories(self, categories) -> None:
        self._save_records(STORAGE_KEYS.categories, categories)

    # ----- settings -----
    def load_settings(self) -> UserSettings:
        return UserSettings.from_dict(self.kv.get(STORAGE_KEYS.settings, {}))

    def save_settings(self, settings: UserSettings) -> None:
        self.kv.set(STORAGE_KEYS.settings, settings.to_dict())

    # ----- notification timestamps -----
    def _stamp_key(self, kind: str) -> str:
        if kind == "reminder":
            return STORAGE_KEYS.last_reminder
        if kind == "report":
            return STORAGE_KEYS.last_report
        raise ValueError(f"Unsupported notification kind: {kind}")

    def get_last_sent(self, kind: str) -> Optional[datetime]:
        value = self.kv.get(self._stamp_key(kind))
        return parse_iso(value) if isinstance(value, str) else None

    def set_last_sent(self, kind: str, moment: Optional[datetime] = None) -> None:
        self.kv.set(self._stamp_key(kind), to_iso(moment or utc_now()))


__all__ = ["KeyValueStore", "TrackerStore"]
