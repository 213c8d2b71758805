"""Mood entry API routes.

Days are UTC days: `?date=2026-10-19` and /moods/today both select
[00:00, next 00:00) UTC.
"""

from datetime import date, datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from prodhub.auth.dependencies import CurrentIdentity, get_current_user
from prodhub.db.engine import get_db
from prodhub.db.models import MoodEntry, utc_day_bounds, utcnow
from prodhub.schemas.envelope import Envelope, ok
from prodhub.schemas.mood import (
    MoodCreate,
    MoodListEnvelope,
    MoodRead,
    MoodUpdate,
    TodayMoodEnvelope,
)
from prodhub.services.ownership import OwnedStore, changes

router = APIRouter(prefix="/moods")


def _moods(db: AsyncSession = Depends(get_db)) -> OwnedStore[MoodEntry]:
    return OwnedStore(db, MoodEntry, "Mood entry")


@router.get("", response_model=MoodListEnvelope)
async def list_moods(
    day: Optional[date] = Query(None, alias="date", description="Only entries from this UTC day"),
    limit: Optional[int] = Query(None, ge=1, le=500),
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[MoodEntry] = Depends(_moods),
):
    criteria = []
    if day:
        start, end = utc_day_bounds(day)
        criteria = [MoodEntry.date >= start, MoodEntry.date < end]
    moods = await store.list_all(
        identity.user_id, *criteria, order_by=[MoodEntry.date.desc()], limit=limit
    )
    return MoodListEnvelope(data=moods, count=len(moods))


@router.get("/today", response_model=TodayMoodEnvelope)
async def list_today(
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[MoodEntry] = Depends(_moods),
):
    start, end = utc_day_bounds(datetime.now(timezone.utc).date())
    moods = await store.list_all(
        identity.user_id,
        MoodEntry.date >= start,
        MoodEntry.date < end,
        order_by=[MoodEntry.date.desc()],
    )
    average = sum(m.energy_level for m in moods) / len(moods) if moods else 0
    return TodayMoodEnvelope(data=moods, count=len(moods), average_energy=round(average))


@router.post("", response_model=Envelope[MoodRead], status_code=201)
async def create_mood(
    body: MoodCreate,
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[MoodEntry] = Depends(_moods),
):
    mood = await store.create(identity.user_id, {**body.model_dump(), "date": utcnow()})
    return ok(mood, message="Mood recorded successfully")


@router.get("/{mood_id}", response_model=Envelope[MoodRead])
async def get_mood(
    mood_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[MoodEntry] = Depends(_moods),
):
    return ok(await store.get(identity.user_id, mood_id))


@router.put("/{mood_id}", response_model=Envelope[MoodRead])
async def update_mood(
    mood_id: str,
    body: MoodUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[MoodEntry] = Depends(_moods),
):
    """Update an entry. Editing a mood re-dates it to now."""
    mood = await store.update(
        identity.user_id, mood_id, {**changes(body), "date": utcnow()}
    )
    return ok(mood, message="Mood updated successfully")


@router.delete("/{mood_id}", response_model=Envelope[MoodRead])
async def delete_mood(
    mood_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[MoodEntry] = Depends(_moods),
):
    mood = await store.delete(identity.user_id, mood_id)
    return ok(mood, message="Mood deleted successfully")
