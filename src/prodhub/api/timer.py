"""Focus-timer API routes — sessions and per-user timer settings.

Learn: timer settings live on the users row (timer_settings JSON), not in
process memory, so they survive restarts and are shared by every server
instance.
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from prodhub.auth.dependencies import CurrentIdentity, get_current_user
from prodhub.db.engine import get_db
from prodhub.db.models import TimerSession, as_utc, utc_day_bounds, utcnow
from prodhub.schemas.envelope import Envelope, ok
from prodhub.schemas.timer import (
    FOCUS_TYPES,
    SessionCreate,
    SessionRead,
    SessionUpdate,
    TodaySessionsEnvelope,
    TodaySummary,
)
from prodhub.schemas.user import TimerSettings, TimerSettingsUpdate
from prodhub.services.ownership import OwnedStore, changes
from prodhub.services.user_service import UserService

router = APIRouter(prefix="/timer")


def _sessions(db: AsyncSession = Depends(get_db)) -> OwnedStore[TimerSession]:
    return OwnedStore(db, TimerSession, "Timer session")


def _user_svc(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


def summarize(sessions: list[TimerSession]) -> TodaySummary:
    focus = [s for s in sessions if s.timer_type in FOCUS_TYPES]
    breaks = [s for s in sessions if s.timer_type == "break"]
    return TodaySummary(
        total_sessions=len(sessions),
        focus_sessions=len(focus),
        break_sessions=len(breaks),
        total_focus_time=sum(s.duration for s in focus),
        total_break_time=sum(s.duration for s in breaks),
        streak_maintained=bool(focus),
    )


# ─── Sessions ────────────────────────────────────────────


@router.get("/sessions", response_model=Envelope[list[SessionRead]])
async def list_sessions(
    timer_type: Optional[str] = Query(None),
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    limit: Optional[int] = Query(None, ge=1, le=500),
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[TimerSession] = Depends(_sessions),
):
    criteria = []
    if timer_type:
        criteria.append(TimerSession.timer_type == timer_type)
    if start_date:
        criteria.append(TimerSession.start_time >= as_utc(start_date))
    if end_date:
        criteria.append(TimerSession.start_time <= as_utc(end_date))
    sessions = await store.list_all(
        identity.user_id,
        *criteria,
        order_by=[TimerSession.start_time.desc()],
        limit=limit,
    )
    return ok(sessions)


@router.get("/sessions/today", response_model=TodaySessionsEnvelope)
async def list_today(
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[TimerSession] = Depends(_sessions),
):
    start, end = utc_day_bounds(datetime.now(timezone.utc).date())
    sessions = await store.list_all(
        identity.user_id,
        TimerSession.start_time >= start,
        TimerSession.start_time < end,
        order_by=[TimerSession.start_time.desc()],
    )
    return TodaySessionsEnvelope(
        data=sessions, count=len(sessions), summary=summarize(sessions)
    )


@router.post("/sessions", response_model=Envelope[SessionRead], status_code=201)
async def create_session(
    body: SessionCreate,
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[TimerSession] = Depends(_sessions),
):
    now = utcnow()
    values = body.model_dump()
    values.update(
        start_time=as_utc(body.start_time) if body.start_time else now,
        end_time=as_utc(body.end_time) if body.end_time else now,
        completed=True,
    )
    session = await store.create(identity.user_id, values)
    return ok(session, message="Timer session saved successfully")


@router.get("/sessions/{session_id}", response_model=Envelope[SessionRead])
async def get_session(
    session_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[TimerSession] = Depends(_sessions),
):
    return ok(await store.get(identity.user_id, session_id))


@router.put("/sessions/{session_id}", response_model=Envelope[SessionRead])
async def update_session(
    session_id: str,
    body: SessionUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[TimerSession] = Depends(_sessions),
):
    session = await store.update(identity.user_id, session_id, changes(body))
    return ok(session, message="Timer session updated successfully")


@router.delete("/sessions/{session_id}", response_model=Envelope[SessionRead])
async def delete_session(
    session_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[TimerSession] = Depends(_sessions),
):
    session = await store.delete(identity.user_id, session_id)
    return ok(session, message="Timer session deleted successfully")


# ─── Settings ────────────────────────────────────────────


@router.get("/settings", response_model=Envelope[TimerSettings])
async def get_timer_settings(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: UserService = Depends(_user_svc),
):
    return ok(await svc.get_timer_settings(identity.user_id))


@router.put("/settings", response_model=Envelope[TimerSettings])
async def update_timer_settings(
    body: TimerSettingsUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: UserService = Depends(_user_svc),
):
    merged = await svc.update_timer_settings(identity.user_id, body)
    return ok(merged, message="Timer settings updated successfully")
