"""Note API routes.

The `tag` filter is applied in Python after the owner-scoped query,
since tags live in a JSON column whose containment operators differ
between PostgreSQL and SQLite.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from prodhub.auth.dependencies import CurrentIdentity, get_current_user
from prodhub.db.engine import get_db
from prodhub.db.models import Note
from prodhub.schemas.envelope import Envelope, ok
from prodhub.schemas.note import NoteCreate, NoteRead, NoteUpdate
from prodhub.services.ownership import OwnedStore, changes

router = APIRouter(prefix="/notes")


def _notes(db: AsyncSession = Depends(get_db)) -> OwnedStore[Note]:
    return OwnedStore(db, Note, "Note")


@router.get("", response_model=Envelope[list[NoteRead]])
async def list_notes(
    tag: Optional[str] = Query(None, description="Only notes carrying this tag"),
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[Note] = Depends(_notes),
):
    notes = await store.list_all(identity.user_id, order_by=[Note.updated_at.desc()])
    if tag:
        notes = [n for n in notes if tag in (n.tags or [])]
    return ok(notes)


@router.post("", response_model=Envelope[NoteRead], status_code=201)
async def create_note(
    body: NoteCreate,
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[Note] = Depends(_notes),
):
    values = body.model_dump()
    values["tags"] = [t.strip() for t in body.tags if t.strip()]
    note = await store.create(identity.user_id, values)
    return ok(note, message="Note created")


@router.get("/{note_id}", response_model=Envelope[NoteRead])
async def get_note(
    note_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[Note] = Depends(_notes),
):
    return ok(await store.get(identity.user_id, note_id))


@router.put("/{note_id}", response_model=Envelope[NoteRead])
async def update_note(
    note_id: str,
    body: NoteUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[Note] = Depends(_notes),
):
    values = changes(body)
    if body.tags is not None:
        values["tags"] = [t.strip() for t in body.tags if t.strip()]
    note = await store.update(identity.user_id, note_id, values)
    return ok(note, message="Note updated")


@router.delete("/{note_id}", response_model=Envelope[NoteRead])
async def delete_note(
    note_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    store: OwnedStore[Note] = Depends(_notes),
):
    note = await store.delete(identity.user_id, note_id)
    return ok(note, message="Note deleted")
