"""Task API routes.

Learn: Routes translate HTTP into OwnedStore calls. The owner always comes
from the authenticated identity; the store adds it to every statement, so
a task id belonging to another user behaves exactly like a missing one.

- GET    /tasks          list the caller's tasks (filters: status, priority)
- POST   /tasks          create
- GET    /tasks/{id}     read one
- PUT    /tasks/{id}     partial update (only fields present in the body)
- DELETE /tasks/{id}     delete
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from prodhub.auth.dependencies import CurrentIdentity, get_current_user
from prodhub.db.engine import get_db
from prodhub.db.models import Task
from prodhub.schemas.envelope import Envelope, ok
from prodhub.schemas.task import TaskCreate, TaskRead, TaskUpdate
from prodhub.services.ownership import OwnedStore, changes

router = APIRouter(prefix="/tasks")


def _tasks(db: AsyncSession = Depends(get_db)) -> OwnedStore[Task]:
    return OwnedStore(db, Task, "Task")


@router.get("", response_model=Envelope[list[TaskRead]])
async def list_tasks(
    status: Optional[str] = Query(None, description="Filter by status"),
    priority: Optional[str] = Query(None, description="Filter by priority"),
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[Task] = Depends(_tasks),
):
    criteria = []
    if status:
        criteria.append(Task.status == status)
    if priority:
        criteria.append(Task.priority == priority)
    tasks = await store.list_all(
        identity.user_id, *criteria, order_by=[Task.created_at.desc()]
    )
    return ok(tasks)


@router.post("", response_model=Envelope[TaskRead], status_code=201)
async def create_task(
    body: TaskCreate,
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[Task] = Depends(_tasks),
):
    task = await store.create(identity.user_id, body.model_dump())
    return ok(task, message="Task created")


@router.get("/{task_id}", response_model=Envelope[TaskRead])
async def get_task(
    task_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[Task] = Depends(_tasks),
):
    return ok(await store.get(identity.user_id, task_id))


@router.put("/{task_id}", response_model=Envelope[TaskRead])
async def update_task(
    task_id: str,
    body: TaskUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[Task] = Depends(_tasks),
):
    task = await store.update(
        identity.user_id, task_id, changes(body, nullable=["deadline"])
    )
    return ok(task, message="Task updated")


@router.delete("/{task_id}", response_model=Envelope[TaskRead])
async def delete_task(
    task_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[Task] = Depends(_tasks),
):
    task = await store.delete(identity.user_id, task_id)
    return ok(task, message="Task deleted")
