"""Async SQLAlchemy engine and session factory.

Learn: SQLAlchemy 2.0 async mode — create_async_engine for connection pooling,
AsyncSession for per-request database access, dependency injection via FastAPI.

The engine is not a module-level global. create_app()'s lifespan builds it
and stores it (plus the session factory) on app.state; get_db() reads it
from the request. Tests hand the app an in-memory SQLite engine instead.
"""

from typing import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from starlette.requests import Request

from prodhub.config import Settings


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the engine with bounded connect/checkout timeouts.

    A slow or unreachable database surfaces as a fast failure instead of
    a request that hangs indefinitely.
    """
    if settings.is_sqlite:
        return create_async_engine(
            settings.database_url,
            echo=settings.debug,
            connect_args={"timeout": settings.db_connect_timeout_seconds},
        )

    # Connection pool: min 5, max 20 connections.
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_size=5,
        max_overflow=15,
        pool_timeout=settings.db_pool_timeout_seconds,
        pool_pre_ping=True,
        connect_args={"timeout": settings.db_connect_timeout_seconds},
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Each request gets its own session.
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency — yields a session per request, auto-closes."""
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
