"""User-editable notification settings persisted in the ``settings`` slot."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class UserSettings:
    email: str = ""
    email_service_id: Optional[str] = None
    email_template_id: Optional[str] = None
    email_public_key: Optional[str] = None
    weekly_reminder_enabled: bool = False
    weekly_report_enabled: bool = False

    @property
    def email_configured(self) -> bool:
        """All four fields the email provider needs are present."""
        return all(
            (self.email, self.email_service_id, self.email_template_id, self.email_public_key)
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "email": self.email,
            "weeklyReminderEnabled": self.weekly_reminder_enabled,
            "weeklyReportEnabled": self.weekly_report_enabled,
        }
        if self.email_service_id is not None:
            data["emailServiceId"] = self.email_service_id
        if self.email_template_id is not None:
            data["emailTemplateId"] = self.email_template_id
        if self.email_public_key is not None:
            data["emailPublicKey"] = self.email_public_key
        return data

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "UserSettings":
        if not isinstance(data, Mapping):
            return cls()

        def _opt(key: str) -> Optional[str]:
            value = data.get(key)
            return str(value) if value else None

        return cls(
            email=str(data.get("email") or ""),
            email_service_id=_opt("emailServiceId"),
            email_template_id=_opt("emailTemplateId"),
            email_public_key=_opt("emailPublicKey"),
            weekly_reminder_enabled=bool(data.get("weeklyReminderEnabled", False)),
            weekly_report_enabled=bool(data.get("weeklyReportEnabled", False)),
        )


__all__ = ["UserSettings"]
