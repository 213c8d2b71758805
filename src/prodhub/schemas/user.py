"""Pydantic schemas for accounts, auth and per-user settings.

Learn: settings are stored as partial JSON on the users row. Reading goes
through UserSettings/TimerSettings, which fill in every default, so a user
created before a preference existed still gets a complete document.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


# ─── Settings ────────────────────────────────────────────


class NotificationSettings(BaseModel):
    email: bool = True
    push: bool = True
    sounds: bool = False
    reminders: bool = True


class PrivacySettings(BaseModel):
    profile_visible: bool = True
    activity_visible: bool = False
    data_sharing: bool = True


class UserSettings(BaseModel):
    """Display, notification and privacy preferences."""
    dark_mode: bool = True
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)
    privacy: PrivacySettings = Field(default_factory=PrivacySettings)
    accent_color: str = Field(
        default="electric-red",
        pattern=r"^(electric-red|vibrant-yellow|bright-blue|emerald-green)$",
    )


class SettingsUpdate(BaseModel):
    settings: UserSettings


class DarkModeUpdate(BaseModel):
    dark_mode: bool


class TimerSettings(BaseModel):
    """Focus-timer preferences. Durations are in seconds."""
    focus_duration: int = Field(default=1500, ge=60)
    break_duration: int = Field(default=300, ge=60)
    long_break_duration: int = Field(default=900, ge=60)
    sessions_before_long_break: int = Field(default=4, ge=1)
    auto_start_breaks: bool = True
    auto_start_focus: bool = False
    sound_enabled: bool = True
    notifications: bool = True


class TimerSettingsUpdate(BaseModel):
    """Partial update — only provided fields are merged."""
    focus_duration: Optional[int] = Field(None, ge=60)
    break_duration: Optional[int] = Field(None, ge=60)
    long_break_duration: Optional[int] = Field(None, ge=60)
    sessions_before_long_break: Optional[int] = Field(None, ge=1)
    auto_start_breaks: Optional[bool] = None
    auto_start_focus: Optional[bool] = None
    sound_enabled: Optional[bool] = None
    notifications: Optional[bool] = None


# ─── Auth ────────────────────────────────────────────────


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=30)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=6)
    settings: Optional[UserSettings] = None

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class LoginRequest(BaseModel):
    email: str
    password: str


class PasswordChange(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=6)


class UserRead(BaseModel):
    id: uuid.UUID
    username: str
    email: str
    settings: UserSettings
    created_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("settings", mode="before")
    @classmethod
    def fill_settings(cls, v):
        return UserSettings.model_validate(v or {})


class AuthData(BaseModel):
    token: str
    user: UserRead
