"""Pydantic schemas for tasks.

Learn: Separate schemas for create/update/read keeps the API clean.
- TaskCreate: what you POST to create a task
- TaskUpdate: what you PUT to modify a task (all optional, partial)
- TaskRead: what the API returns

None of the input schemas has a user_id field, so an owner sent by the
client is dropped during validation. Strings are stripped before the
length checks, so a whitespace-only title counts as empty.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

PRIORITY_PATTERN = r"^(low|medium|high)$"
STATUS_PATTERN = r"^(todo|in-progress|completed)$"


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(default="", max_length=500)
    priority: str = Field(default="medium", pattern=PRIORITY_PATTERN)
    status: str = Field(default="todo", pattern=STATUS_PATTERN)
    deadline: Optional[datetime] = None

    model_config = {"str_strip_whitespace": True}


class TaskUpdate(BaseModel):
    """Partial update — only fields present in the body are applied."""
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    priority: Optional[str] = Field(None, pattern=PRIORITY_PATTERN)
    status: Optional[str] = Field(None, pattern=STATUS_PATTERN)
    deadline: Optional[datetime] = None

    model_config = {"str_strip_whitespace": True}


class TaskRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    title: str
    description: str
    priority: str
    status: str
    deadline: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
