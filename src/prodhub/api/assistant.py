"""Assistant chat history API.

Learn: the assistant doesn't generate anything. POST stores the user's
message together with one reply from a fixed list. What matters here is
that the history is owned data like any other resource: listing and
clearing only ever touch the caller's own entries.
"""

import random
from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from prodhub.auth.dependencies import CurrentIdentity, get_current_user
from prodhub.db.engine import get_db
from prodhub.db.models import ChatEntry
from prodhub.schemas.chat import ChatCleared, ChatExchange, ChatMessage, ChatRequest
from prodhub.schemas.envelope import Envelope, ok
from prodhub.services.ownership import OwnedStore

router = APIRouter(prefix="/ai")

CANNED_REPLIES = (
    "Based on your current tasks and schedule, I recommend focusing on high-priority items first.",
    "Great question! Let me check your data and provide some insights.",
    "I can help with that. Here's what I found based on your productivity patterns.",
    "I've processed your request. Here are my recommendations.",
    "Here's what I think based on your goals.",
    "Thanks for sharing! Here's my analysis and some actionable steps you can take.",
)

REPLY_DELAY = timedelta(seconds=1)


def _chat(db: AsyncSession = Depends(get_db)) -> OwnedStore[ChatEntry]:
    return OwnedStore(db, ChatEntry, "Chat entry")


def to_messages(entry: ChatEntry) -> ChatExchange:
    return ChatExchange(
        user_message=ChatMessage(
            id=f"{entry.id}_user",
            entry_id=entry.id,
            message=entry.user_message,
            sender="user",
            timestamp=entry.timestamp,
        ),
        ai_response=ChatMessage(
            id=f"{entry.id}_ai",
            entry_id=entry.id,
            message=entry.ai_response,
            sender="ai",
            timestamp=entry.timestamp + REPLY_DELAY,
        ),
    )


@router.get("/chat", response_model=Envelope[list[ChatMessage]])
async def get_history(
    limit: Optional[int] = Query(None, ge=1, le=500, description="Max exchanges"),
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[ChatEntry] = Depends(_chat),
):
    """Chat history, newest first, as a flat list of messages."""
    entries = await store.list_all(
        identity.user_id, order_by=[ChatEntry.timestamp.desc()], limit=limit
    )
    messages = []
    for entry in entries:
        exchange = to_messages(entry)
        messages.extend([exchange.ai_response, exchange.user_message])
    return ok(messages)


@router.post("/chat", response_model=Envelope[ChatExchange])
async def send_message(
    body: ChatRequest,
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[ChatEntry] = Depends(_chat),
):
    entry = await store.create(
        identity.user_id,
        {
            "user_message": body.message,
            "ai_response": random.choice(CANNED_REPLIES),
            "context": body.context,
        },
    )
    return ok(to_messages(entry), message="Message processed successfully")


@router.delete("/chat", response_model=ChatCleared)
async def clear_history(
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[ChatEntry] = Depends(_chat),
):
    cleared = await store.delete_all(identity.user_id)
    return ChatCleared(message="Chat history cleared successfully", cleared_count=cleared)
