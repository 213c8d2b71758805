"""Calendar event API routes.

`month` and `year` filter together; one without the other is ignored.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from prodhub.auth.dependencies import CurrentIdentity, get_current_user
from prodhub.db.engine import get_db
from prodhub.db.models import CalendarEvent
from prodhub.schemas.calendar import EventCreate, EventRead, EventUpdate
from prodhub.schemas.envelope import Envelope, ok
from prodhub.services.ownership import OwnedStore, changes

router = APIRouter(prefix="/calendar/events")


def _events(db: AsyncSession = Depends(get_db)) -> OwnedStore[CalendarEvent]:
    return OwnedStore(db, CalendarEvent, "Event")


@router.get("", response_model=Envelope[list[EventRead]])
async def list_events(
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=2000, le=2100),
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[CalendarEvent] = Depends(_events),
):
    criteria = []
    if month and year:
        criteria = [CalendarEvent.month == month, CalendarEvent.year == year]
    events = await store.list_all(
        identity.user_id,
        *criteria,
        order_by=[CalendarEvent.year, CalendarEvent.month, CalendarEvent.day],
    )
    return ok(events)


@router.post("", response_model=Envelope[EventRead], status_code=201)
async def create_event(
    body: EventCreate,
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[CalendarEvent] = Depends(_events),
):
    event = await store.create(identity.user_id, body.model_dump())
    return ok(event, message="Event created successfully")


@router.get("/{event_id}", response_model=Envelope[EventRead])
async def get_event(
    event_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[CalendarEvent] = Depends(_events),
):
    return ok(await store.get(identity.user_id, event_id))


@router.put("/{event_id}", response_model=Envelope[EventRead])
async def update_event(
    event_id: str,
    body: EventUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[CalendarEvent] = Depends(_events),
):
    event = await store.update(
        identity.user_id, event_id, changes(body)
    )
    return ok(event, message="Event updated successfully")


@router.delete("/{event_id}", response_model=Envelope[EventRead])
async def delete_event(
    event_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[CalendarEvent] = Depends(_events),
):
    event = await store.delete(identity.user_id, event_id)
    return ok(event, message="Event deleted successfully")
