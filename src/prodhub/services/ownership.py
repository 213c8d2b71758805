"""Ownership-scoped data access shared by every user-owned resource.

Learn: This is the authorization boundary for data. Handlers never query
an owned table directly; they go through OwnedStore, which guarantees:

1. List queries always include `user_id == owner`. Caller filters are
   ANDed onto it, never substituted for it.
2. Read/update/delete match on `id AND user_id` in a single statement.
   Updates and deletes use UPDATE/DELETE ... RETURNING, so the owner check
   happens at write time. There is no read-then-write window in which the
   owner could change.
3. Zero matching rows is NotFoundError, whether the id doesn't exist or
   belongs to someone else. The response can't reveal other users' data.
4. Create always sets user_id from the authenticated identity. Any owner
   or id in the incoming values is dropped.

Ids that don't parse as UUIDs are treated as not found, not as bad input.
"""

import uuid
from typing import Any, Generic, Iterable, Optional, TypeVar

import structlog
from pydantic import BaseModel
from sqlalchemy import ColumnElement, Select, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from prodhub.config import settings
from prodhub.db.models import OwnedMixin
from prodhub.errors import NotFoundError

logger = structlog.get_logger()

ModelT = TypeVar("ModelT", bound=OwnedMixin)

# Never writable through create/update values
PROTECTED_FIELDS = frozenset({"id", "user_id"})


def changes(body: BaseModel, nullable: Iterable[str] = ()) -> dict[str, Any]:
    """Fields the client actually sent in a partial update.

    An explicit null only clears columns listed in `nullable`; for every
    other column it means "leave unchanged".
    """
    return {
        k: v
        for k, v in body.model_dump(exclude_unset=True).items()
        if v is not None or k in nullable
    }


def parse_resource_id(resource_id: str | uuid.UUID, label: str) -> uuid.UUID:
    if isinstance(resource_id, uuid.UUID):
        return resource_id
    try:
        return uuid.UUID(resource_id)
    except (ValueError, AttributeError, TypeError):
        raise NotFoundError(f"{label} not found")


class OwnedStore(Generic[ModelT]):
    """CRUD for one owned model, every statement scoped to an owner."""

    def __init__(self, db: AsyncSession, model: type[ModelT], label: str):
        self.db = db
        self.model = model
        self.label = label

    # ─── Query building ──────────────────────────────────

    def owner_clause(self, owner_id: uuid.UUID) -> ColumnElement[bool]:
        return self.model.user_id == owner_id

    def scoped(self, owner_id: uuid.UUID, *criteria: ColumnElement[bool]) -> Select:
        """SELECT restricted to the owner, plus any extra criteria."""
        return select(self.model).where(self.owner_clause(owner_id), *criteria)

    def _match_one(self, owner_id: uuid.UUID, resource_id: uuid.UUID):
        return (self.model.id == resource_id, self.owner_clause(owner_id))

    # ─── Read ────────────────────────────────────────────

    async def list_all(
        self,
        owner_id: uuid.UUID,
        *criteria: ColumnElement[bool],
        order_by: Iterable[Any] = (),
        limit: Optional[int] = None,
    ) -> list[ModelT]:
        query = self.scoped(owner_id, *criteria).order_by(*order_by)
        if limit:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def aggregate(
        self, owner_id: uuid.UUID, expression: Any, *criteria: ColumnElement[bool]
    ) -> Any:
        """Single aggregate (count, avg, sum) over the owner's rows."""
        query = (
            select(expression)
            .select_from(self.model)
            .where(self.owner_clause(owner_id), *criteria)
        )
        return (await self.db.execute(query)).scalar_one()

    async def count(self, owner_id: uuid.UUID, *criteria: ColumnElement[bool]) -> int:
        return await self.aggregate(owner_id, func.count(), *criteria)

    async def get(self, owner_id: uuid.UUID, resource_id: str | uuid.UUID) -> ModelT:
        rid = parse_resource_id(resource_id, self.label)
        result = await self.db.execute(
            select(self.model).where(*self._match_one(owner_id, rid))
        )
        obj = result.scalars().first()
        if obj is None:
            await self._not_found(owner_id, rid, "read")
        return obj

    # ─── Write ───────────────────────────────────────────

    async def create(self, owner_id: uuid.UUID, values: dict[str, Any]) -> ModelT:
        fields = {k: v for k, v in values.items() if k not in PROTECTED_FIELDS}
        obj = self.model(**fields, user_id=owner_id)
        self.db.add(obj)
        await self.db.commit()
        await self.db.refresh(obj)
        logger.info(f"{self.model.__tablename__}.created", resource_id=str(obj.id))
        return obj

    async def update(
        self,
        owner_id: uuid.UUID,
        resource_id: str | uuid.UUID,
        values: dict[str, Any],
    ) -> ModelT:
        """Apply `values` to the owner's row in one UPDATE ... RETURNING."""
        rid = parse_resource_id(resource_id, self.label)
        fields = {k: v for k, v in values.items() if k not in PROTECTED_FIELDS}
        if not fields:
            return await self.get(owner_id, rid)

        stmt = (
            update(self.model)
            .where(*self._match_one(owner_id, rid))
            .values(**fields)
            .returning(self.model)
            .execution_options(populate_existing=True)
        )
        obj = (await self.db.execute(stmt)).scalars().first()
        if obj is None:
            await self.db.rollback()
            await self._not_found(owner_id, rid, "update")
        await self.db.commit()
        logger.info(f"{self.model.__tablename__}.updated", resource_id=str(rid))
        return obj

    async def delete(self, owner_id: uuid.UUID, resource_id: str | uuid.UUID) -> ModelT:
        """Delete the owner's row in one DELETE ... RETURNING."""
        rid = parse_resource_id(resource_id, self.label)
        stmt = (
            delete(self.model)
            .where(*self._match_one(owner_id, rid))
            .returning(self.model)
        )
        obj = (await self.db.execute(stmt)).scalars().first()
        if obj is None:
            await self.db.rollback()
            await self._not_found(owner_id, rid, "delete")
        await self.db.commit()
        logger.info(f"{self.model.__tablename__}.deleted", resource_id=str(rid))
        return obj

    async def delete_all(self, owner_id: uuid.UUID) -> int:
        result = await self.db.execute(
            delete(self.model).where(self.owner_clause(owner_id))
        )
        await self.db.commit()
        return result.rowcount or 0

    # ─── Misses ──────────────────────────────────────────

    async def _not_found(
        self, owner_id: uuid.UUID, resource_id: uuid.UUID, action: str
    ) -> None:
        """Raise NotFoundError, logging an audit event on foreign access.

        The client sees the same 404 either way; only the log tells an
        access to another user's row apart from a missing id.
        """
        if settings.audit_ownership:
            result = await self.db.execute(
                select(self.model.user_id).where(self.model.id == resource_id)
            )
            actual_owner = result.scalars().first()
            if actual_owner is not None and actual_owner != owner_id:
                logger.warning(
                    "ownership.denied",
                    resource=self.model.__tablename__,
                    resource_id=str(resource_id),
                    action=action,
                )
        raise NotFoundError(f"{self.label} not found")
