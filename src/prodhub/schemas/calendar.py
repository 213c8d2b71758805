"""Pydantic schemas for calendar events (day granularity)."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class EventCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=1000)
    day: int = Field(..., ge=1, le=31)
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=2000, le=2100)
    color: str = Field(default="bright-blue", max_length=30)

    model_config = {"str_strip_whitespace": True}


class EventUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    day: Optional[int] = Field(None, ge=1, le=31)
    month: Optional[int] = Field(None, ge=1, le=12)
    year: Optional[int] = Field(None, ge=2000, le=2100)
    color: Optional[str] = Field(None, max_length=30)

    model_config = {"str_strip_whitespace": True}


class EventRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    title: str
    description: str
    day: int
    month: int
    year: int
    color: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
