"""Pydantic schemas for assistant chat history.

Learn: one stored ChatEntry is shown to the client as two messages,
the user's and the reply, with the reply one second later.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

CONTEXT_PATTERN = r"^(productivity|task|goal|general|motivation)$"


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=4000)
    context: str = Field(default="general", pattern=CONTEXT_PATTERN)

    model_config = {"str_strip_whitespace": True}


class ChatMessage(BaseModel):
    id: str
    entry_id: uuid.UUID
    message: str
    sender: str  # "user" or "ai"
    timestamp: datetime


class ChatExchange(BaseModel):
    user_message: ChatMessage
    ai_response: ChatMessage


class ChatCleared(BaseModel):
    success: bool = True
    message: str
    cleared_count: int
