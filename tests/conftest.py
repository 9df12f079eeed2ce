"""Shared fixtures for the screen-time API tests.

Uses SQLite (aiosqlite) by default, no PostgreSQL required.
Set TEST_DATABASE_URL to override (e.g. for CI with real PostgreSQL).
"""

import os
import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite://")

# Ensure settings can be loaded without .env
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)
os.environ.setdefault("TIMEZONE", "UTC")

from screentime.database import Base  # noqa: E402

_engine_kwargs = {}
if TEST_DATABASE_URL.startswith("sqlite"):
    _engine_kwargs = {
        "connect_args": {"check_same_thread": False},
        "poolclass": StaticPool,
    }


# ---------------------------------------------------------------------------
# Reset rate-limiter counters before every test
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _reset_rate_limits():
    """Clear in-memory rate-limit counters so tests never block each other."""
    from screentime.core.rate_limit import limiter

    storage = getattr(limiter, "_storage", None)
    if storage is not None and hasattr(storage, "reset"):
        storage.reset()


# ---------------------------------------------------------------------------
# Per-test database: fresh tables, session rolled back afterwards
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture()
async def db_session():
    import screentime.models  # noqa: F401 - populate Base.metadata

    engine = create_async_engine(TEST_DATABASE_URL, echo=False, **_engine_kwargs)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False,
    )
    async with session_factory() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


# ---------------------------------------------------------------------------
# HTTP test client
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture()
async def client(db_session: AsyncSession):
    from screentime.database import get_db
    from screentime.main import app

    async def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Convenience: a guardian id and a child created through the API
# ---------------------------------------------------------------------------

@pytest.fixture()
def guardian_id() -> str:
    return str(uuid.uuid4())


@pytest_asyncio.fixture()
async def child(client: AsyncClient, guardian_id: str) -> dict:
    """Create a child for ``guardian_id`` and return the response body."""
    resp = await client.post("/api/v1/children/", json={
        "name": "Mia",
        "guardian_id": guardian_id,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()
