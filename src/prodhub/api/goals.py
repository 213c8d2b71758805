"""Goal API routes.

Learn: besides plain CRUD, goals have two state-changing endpoints:
- PUT /goals/{id}/progress clamps to 0–100 and sets completed iff 100
- PUT /goals/{id}/complete sets progress to 100, or caps it at 99 when
  un-completing

The cap is computed inside the UPDATE statement (CASE on the current
value), so it stays a single owner-scoped write.

The list endpoint's stats are aggregates over the same filtered,
owner-scoped rows as the list itself.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import case, func
from sqlalchemy.ext.asyncio import AsyncSession

from prodhub.auth.dependencies import CurrentIdentity, get_current_user
from prodhub.db.engine import get_db
from prodhub.db.models import Goal
from prodhub.schemas.envelope import Envelope, ok
from prodhub.schemas.goal import (
    CompletionUpdate,
    GoalCreate,
    GoalListEnvelope,
    GoalRead,
    GoalStats,
    GoalUpdate,
    ProgressUpdate,
)
from prodhub.services.ownership import OwnedStore, changes

router = APIRouter(prefix="/goals")

NO_DEADLINE = "No deadline"


def _goals(db: AsyncSession = Depends(get_db)) -> OwnedStore[Goal]:
    return OwnedStore(db, Goal, "Goal")


async def _stats(store: OwnedStore[Goal], user_id, criteria: list) -> GoalStats:
    total = await store.count(user_id, *criteria)
    completed = await store.count(user_id, *criteria, Goal.completed.is_(True))
    avg = await store.aggregate(user_id, func.avg(Goal.progress), *criteria)
    return GoalStats(
        total=total,
        completed=completed,
        in_progress=total - completed,
        average_progress=round(avg or 0),
        completion_rate=round(completed / total * 100) if total else 0,
    )


@router.get("", response_model=GoalListEnvelope)
async def list_goals(
    category: Optional[str] = Query(None),
    completed: Optional[bool] = Query(None),
    limit: Optional[int] = Query(None, ge=1, le=500),
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[Goal] = Depends(_goals),
):
    """List goals, active first, then by progress (highest first)."""
    criteria = []
    if category:
        criteria.append(Goal.category == category)
    if completed is not None:
        criteria.append(Goal.completed.is_(completed))

    goals = await store.list_all(
        identity.user_id,
        *criteria,
        order_by=[Goal.completed, Goal.progress.desc()],
        limit=limit,
    )
    return GoalListEnvelope(
        data=goals,
        count=len(goals),
        stats=await _stats(store, identity.user_id, criteria),
    )


@router.post("", response_model=Envelope[GoalRead], status_code=201)
async def create_goal(
    body: GoalCreate,
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[Goal] = Depends(_goals),
):
    values = body.model_dump()
    values.update(
        deadline=body.deadline or NO_DEADLINE,
        deadline_type="date" if body.deadline else "none",
        progress=0,
        completed=False,
    )
    goal = await store.create(identity.user_id, values)
    return ok(goal, message="Goal created successfully")


@router.get("/{goal_id}", response_model=Envelope[GoalRead])
async def get_goal(
    goal_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[Goal] = Depends(_goals),
):
    return ok(await store.get(identity.user_id, goal_id))


@router.put("/{goal_id}", response_model=Envelope[GoalRead])
async def update_goal(
    goal_id: str,
    body: GoalUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[Goal] = Depends(_goals),
):
    values = changes(body)
    if "deadline" in values:
        values["deadline_type"] = "date"
    goal = await store.update(identity.user_id, goal_id, values)
    return ok(goal, message="Goal updated successfully")


@router.put("/{goal_id}/progress", response_model=Envelope[GoalRead])
async def update_progress(
    goal_id: str,
    body: ProgressUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[Goal] = Depends(_goals),
):
    progress = min(max(body.progress, 0), 100)
    goal = await store.update(
        identity.user_id,
        goal_id,
        {"progress": progress, "completed": progress == 100},
    )
    return ok(goal, message=f"Progress updated to {progress}%")


@router.put("/{goal_id}/complete", response_model=Envelope[GoalRead])
async def set_completion(
    goal_id: str,
    body: CompletionUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[Goal] = Depends(_goals),
):
    if body.completed:
        progress = 100
    else:
        progress = case((Goal.progress > 99, 99), else_=Goal.progress)
    goal = await store.update(
        identity.user_id,
        goal_id,
        {"completed": body.completed, "progress": progress},
    )
    message = "Goal marked as completed!" if body.completed else "Goal marked as in progress"
    return ok(goal, message=message)


@router.delete("/{goal_id}", response_model=Envelope[GoalRead])
async def delete_goal(
    goal_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[Goal] = Depends(_goals),
):
    goal = await store.delete(identity.user_id, goal_id)
    return ok(goal, message="Goal deleted successfully")
