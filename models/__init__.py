"""Domain records and the storage table used by the tracker."""
from .activity import ActivityLog
from .category import Category
from .kv_slot import KeyValueSlot
from .task import Task
from .user_settings import UserSettings

__all__ = ["ActivityLog", "Category", "KeyValueSlot", "Task", "UserSettings"]
