"""SQLModel table backing the key-value persistence slots."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from utils.datetime_utils import utc_now


class KeyValueSlot(SQLModel, table=True):
    """One named slot holding a whole JSON-serialised collection."""

    __tablename__ = "kv_slot"

    key: str = Field(primary_key=True, description="Slot name")
    value_json: str = Field(description="JSON payload of the whole collection")
    updated_at: datetime = Field(default_factory=utc_now)


__all__ = ["KeyValueSlot"]
