# sborrowhub/services/settings_service.py
from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Literal

from pydantic import BaseModel, ConfigDict, ValidationError as PydanticValidationError

from sborrowhub.errors import ValidationError
from sborrowhub.extensions import db
from sborrowhub.models.user_settings import UserSettings


@dataclass(frozen=True)
class UserPreferences:
    """Per-user preferences, handed to the client at login."""
    # Notifications
    emailNotifications: bool = True
    borrowReminders: bool = True
    returnReminders: bool = True
    overdueAlerts: bool = True
    newItemAlerts: bool = False
    # Privacy
    showProfile: bool = True
    showBorrowHistory: bool = False
    allowMessages: bool = True
    # Display
    language: str = "english"
    itemsPerPage: int = 12
    defaultView: str = "grid"

    def to_dict(self) -> dict:
        return asdict(self)


class _PreferencesPatch(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    emailNotifications: bool | None = None
    borrowReminders: bool | None = None
    returnReminders: bool | None = None
    overdueAlerts: bool | None = None
    newItemAlerts: bool | None = None
    showProfile: bool | None = None
    showBorrowHistory: bool | None = None
    allowMessages: bool | None = None
    language: str | None = None
    itemsPerPage: int | None = None
    defaultView: Literal["grid", "list"] | None = None


_KNOWN = {f.name for f in fields(UserPreferences)}


class SettingsService:
    @staticmethod
    def _row(user_id: int):
        return UserSettings.query.filter_by(user_id=user_id).first()

    @staticmethod
    def get(user_id: int) -> UserPreferences:
        row = SettingsService._row(user_id)
        stored = dict(row.preferences or {}) if row else {}
        # keys dropped from UserPreferences are ignored
        return UserPreferences(**{k: v for k, v in stored.items() if k in _KNOWN})

    @staticmethod
    def update(user_id: int, changes: dict) -> UserPreferences:
        try:
            patch = _PreferencesPatch.model_validate(changes or {})
        except PydanticValidationError as e:
            raise ValidationError(
                "Invalid settings",
                [{"field": ".".join(str(p) for p in err["loc"]) or "body", "message": err["msg"]}
                 for err in e.errors()],
            )
        if patch.itemsPerPage is not None and not 1 <= patch.itemsPerPage <= 100:
            raise ValidationError(
                "Invalid settings",
                [{"field": "itemsPerPage", "message": "must be between 1 and 100"}],
            )

        merged = SettingsService.get(user_id).to_dict()
        merged.update(patch.model_dump(exclude_none=True))
        prefs = UserPreferences(**merged)

        row = SettingsService._row(user_id)
        if row is None:
            row = UserSettings(user_id=user_id)
            db.session.add(row)
        row.preferences = prefs.to_dict()
        db.session.commit()
        return prefs

    @staticmethod
    def reset(user_id: int) -> UserPreferences:
        row = SettingsService._row(user_id)
        if row is not None:
            db.session.delete(row)
            db.session.commit()
        return UserPreferences()

    @staticmethod
    def wants_overdue_mail(user_id: int) -> bool:
        prefs = SettingsService.get(user_id)
        return prefs.emailNotifications and prefs.overdueAlerts
