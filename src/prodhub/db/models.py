"""SQLAlchemy ORM models — single source of truth for the database schema.

Learn: Declarative ORM mapping with SQLAlchemy 2.0 style (Mapped[] + mapped_column).
Each class = one table.

Key concepts:
- UUID primary keys, generated in Python so they exist before flush
- Portable types (Uuid, JSON) so the same models run on PostgreSQL and SQLite
- Every user-owned table gets its owner column from OwnedMixin; the
  ownership-scoped store (services/ownership.py) relies on that column name
"""

import uuid
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes from clients as UTC."""
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def utc_day_bounds(day: date) -> tuple[datetime, datetime]:
    """[00:00, next 00:00) of a UTC calendar day."""
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    return start, start + timedelta(days=1)


def new_uuid() -> uuid.UUID:
    return uuid.uuid4()


# ══════════════════════════════════════════════════════════════
# Users
# ══════════════════════════════════════════════════════════════


class User(Base):
    """An account. Owns every other row in the database.

    Learn: only the bcrypt hash is stored. `settings` and `timer_settings`
    hold partial JSON documents; the pydantic schemas fill in defaults on
    read, so adding a preference never needs a migration.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=new_uuid
    )
    username: Mapped[str] = mapped_column(String(30), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    settings: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    timer_settings: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )


class OwnedMixin:
    """Primary key + owner foreign key shared by all user-owned tables."""

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=new_uuid
    )

    @declared_attr
    def user_id(cls) -> Mapped[uuid.UUID]:
        return mapped_column(
            Uuid,
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )


# ══════════════════════════════════════════════════════════════
# Owned resources
# ══════════════════════════════════════════════════════════════


class Task(OwnedMixin, Base):
    __tablename__ = "tasks"

    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(String(500), default="")
    priority: Mapped[str] = mapped_column(String(10), default="medium")
    status: Mapped[str] = mapped_column(String(20), default="todo")
    deadline: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )


class Note(OwnedMixin, Base):
    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    tags: Mapped[list] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )


class CalendarEvent(OwnedMixin, Base):
    """A day-granular calendar entry (no time of day)."""

    __tablename__ = "calendar_events"
    __table_args__ = (
        Index("ix_calendar_events_owner_month", "user_id", "year", "month"),
    )

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(String(1000), default="")
    day: Mapped[int] = mapped_column(Integer, nullable=False)
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    color: Mapped[str] = mapped_column(String(30), default="bright-blue")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )


class Goal(OwnedMixin, Base):
    """A goal with 0–100 progress. `deadline` is free text ("No deadline")."""

    __tablename__ = "goals"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(String(1000), default="")
    progress: Mapped[int] = mapped_column(Integer, default=0)
    target: Mapped[int] = mapped_column(Integer, nullable=False)
    deadline: Mapped[str] = mapped_column(String(100), default="No deadline")
    deadline_type: Mapped[str] = mapped_column(String(20), default="none")
    completed: Mapped[bool] = mapped_column(Boolean, default=False)
    color: Mapped[str] = mapped_column(String(30), default="electric-red")
    category: Mapped[str] = mapped_column(String(20), default="personal")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )


class MoodEntry(OwnedMixin, Base):
    __tablename__ = "mood_entries"

    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, index=True
    )
    mood: Mapped[str] = mapped_column(String(20), nullable=False)
    energy_level: Mapped[int] = mapped_column(Integer, default=3)
    notes: Mapped[str] = mapped_column(String(500), default="")
    factors: Mapped[list] = mapped_column(JSON, default=list)


class TimerSession(OwnedMixin, Base):
    """A finished focus/break interval. `duration` is in minutes."""

    __tablename__ = "timer_sessions"

    start_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, index=True
    )
    end_time: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    duration: Mapped[int] = mapped_column(Integer, nullable=False)
    timer_type: Mapped[str] = mapped_column(String(20), default="pomodoro")
    completed: Mapped[bool] = mapped_column(Boolean, default=True)
    notes: Mapped[str] = mapped_column(String(500), default="")


class ChatEntry(OwnedMixin, Base):
    """One assistant exchange: the user's message and the reply."""

    __tablename__ = "chat_entries"

    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, index=True
    )
    user_message: Mapped[str] = mapped_column(Text, nullable=False)
    ai_response: Mapped[str] = mapped_column(Text, nullable=False)
    context: Mapped[str] = mapped_column(String(20), default="general")
    helpful: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
