"""Pydantic schemas for mood entries."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from prodhub.schemas.envelope import Envelope

MOOD_PATTERN = r"^(excited|happy|neutral|sad|stressed|angry)$"
MOOD_TYPES = [
    {"id": "excited", "label": "Excited", "color": "electric-red"},
    {"id": "happy", "label": "Happy", "color": "emerald-green"},
    {"id": "neutral", "label": "Neutral", "color": "bright-blue"},
    {"id": "sad", "label": "Sad", "color": "vibrant-yellow"},
    {"id": "stressed", "label": "Stressed", "color": "electric-red"},
    {"id": "angry", "label": "Angry", "color": "electric-red"},
]


class MoodCreate(BaseModel):
    mood: str = Field(..., pattern=MOOD_PATTERN)
    energy_level: int = Field(..., ge=1, le=5)
    notes: str = Field(default="", max_length=500)
    factors: list[str] = Field(default_factory=list)


class MoodUpdate(BaseModel):
    mood: Optional[str] = Field(None, pattern=MOOD_PATTERN)
    energy_level: Optional[int] = Field(None, ge=1, le=5)
    notes: Optional[str] = Field(None, max_length=500)
    factors: Optional[list[str]] = None


class MoodRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    date: datetime
    mood: str
    energy_level: int
    notes: str
    factors: list[str]

    model_config = {"from_attributes": True}


class MoodListEnvelope(Envelope[list[MoodRead]]):
    mood_types: list[dict[str, str]] = Field(default_factory=lambda: list(MOOD_TYPES))


class TodayMoodEnvelope(Envelope[list[MoodRead]]):
    average_energy: int
