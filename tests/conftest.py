"""Test fixtures — a fresh in-memory database per test.

Learn: Testing pattern for async SQLAlchemy + FastAPI:

1. Settings are read from env vars at import time, so the signing secret,
   a cheap bcrypt work factor and a SQLite URL are set before anything
   from prodhub is imported.
2. Each test gets its own in-memory SQLite engine. StaticPool keeps the
   one connection alive, so every session sees the same database.
3. The engine is handed to the app through app.state, exactly where the
   lifespan would put it. Nothing is monkeypatched in the app code.

Redis is never initialised, so the rate limiter skips itself.
"""

import os
import uuid

os.environ["PRODHUB_JWT_SECRET"] = "test-secret-" + "x" * 40
os.environ["PRODHUB_BCRYPT_ROUNDS"] = "4"
os.environ["PRODHUB_DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["PRODHUB_ENVIRONMENT"] = "test"

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from prodhub.db.engine import build_session_factory  # noqa: E402
from prodhub.db.models import Base  # noqa: E402
from prodhub.main import app  # noqa: E402

TEST_DB_URL = "sqlite+aiosqlite://"
PASSWORD = "secret1"


@pytest_asyncio.fixture()
async def engine():
    """In-memory database with the full schema, dropped after the test."""
    engine = create_async_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture()
async def session_factory(engine):
    return build_session_factory(engine)


@pytest_asyncio.fixture()
async def db_session(session_factory):
    """Direct session for service-level tests."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def client(engine, session_factory):
    """HTTP client against the real app, real auth, test database."""
    app.state.engine = engine
    app.state.session_factory = session_factory

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture()
async def register_user(client):
    """Factory: register a fresh account, return (auth headers, user dict)."""

    async def _register(username=None, email=None, password=PASSWORD):
        suffix = uuid.uuid4().hex[:8]
        r = await client.post(
            "/api/auth/register",
            json={
                "username": username or f"user_{suffix}",
                "email": email or f"user-{suffix}@example.com",
                "password": password,
            },
        )
        assert r.status_code == 201, r.text
        data = r.json()["data"]
        return {"Authorization": f"Bearer {data['token']}"}, data["user"]

    return _register


@pytest_asyncio.fixture()
async def auth_headers(register_user):
    headers, _ = await register_user()
    return headers


@pytest_asyncio.fixture()
async def other_headers(register_user):
    """A second, unrelated account."""
    headers, _ = await register_user()
    return headers
