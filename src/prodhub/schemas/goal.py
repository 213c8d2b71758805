"""Pydantic schemas for goals.

Learn: progress is 0–100 and `completed` follows it: progress 100 means
completed, and un-completing a goal caps progress at 99. The list
endpoint also returns aggregate stats over the caller's goals and the
color/category choices the client can offer.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from prodhub.schemas.envelope import Envelope

CATEGORIES = ["learning", "health", "work", "personal", "financial", "creative"]
CATEGORY_PATTERN = r"^(learning|health|work|personal|financial|creative)$"
COLORS = [
    {"name": "electric-red", "label": "Red"},
    {"name": "emerald-green", "label": "Green"},
    {"name": "bright-blue", "label": "Blue"},
    {"name": "vibrant-yellow", "label": "Yellow"},
]


class GoalCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=1000)
    target: int = Field(..., ge=1)
    deadline: Optional[str] = Field(None, max_length=100)
    color: str = Field(default="electric-red", max_length=30)
    category: str = Field(default="personal", pattern=CATEGORY_PATTERN)

    model_config = {"str_strip_whitespace": True}


class GoalUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    target: Optional[int] = Field(None, ge=1)
    deadline: Optional[str] = Field(None, max_length=100)
    color: Optional[str] = Field(None, max_length=30)
    category: Optional[str] = Field(None, pattern=CATEGORY_PATTERN)

    model_config = {"str_strip_whitespace": True}


class ProgressUpdate(BaseModel):
    # Out-of-range values are clamped, not rejected
    progress: int


class CompletionUpdate(BaseModel):
    completed: bool


class GoalRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    title: str
    description: str
    progress: int
    target: int
    deadline: str
    deadline_type: str
    completed: bool
    color: str
    category: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class GoalStats(BaseModel):
    total: int
    completed: int
    in_progress: int
    average_progress: int
    completion_rate: int


class GoalMeta(BaseModel):
    colors: list[dict[str, str]] = Field(default_factory=lambda: list(COLORS))
    categories: list[str] = Field(default_factory=lambda: list(CATEGORIES))


class GoalListEnvelope(Envelope[list[GoalRead]]):
    stats: GoalStats
    meta: GoalMeta = Field(default_factory=GoalMeta)
