"""Pydantic schemas for focus-timer sessions.

Learn: `duration` is in minutes. pomodoro and deep-work count as focus
time; break counts as break time; custom counts as neither.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from prodhub.schemas.envelope import Envelope

TIMER_TYPE_PATTERN = r"^(pomodoro|break|deep-work|custom)$"
FOCUS_TYPES = ("pomodoro", "deep-work")


class SessionCreate(BaseModel):
    duration: int = Field(..., ge=1)
    timer_type: str = Field(..., pattern=TIMER_TYPE_PATTERN)
    notes: str = Field(default="", max_length=500)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None


class SessionUpdate(BaseModel):
    notes: Optional[str] = Field(None, max_length=500)
    end_time: Optional[datetime] = None
    duration: Optional[int] = Field(None, ge=1)


class SessionRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    start_time: datetime
    end_time: Optional[datetime]
    duration: int
    timer_type: str
    completed: bool
    notes: str

    model_config = {"from_attributes": True}


class TodaySummary(BaseModel):
    total_sessions: int
    focus_sessions: int
    break_sessions: int
    total_focus_time: int
    total_break_time: int
    streak_maintained: bool


class TodaySessionsEnvelope(Envelope[list[SessionRead]]):
    summary: TodaySummary
