"""
Top-level pytest configuration.

Provides:
  - A test SQLite database (aiosqlite) with all tables created fresh per test.
  - A db_session fixture that rolls back each test in a transaction.
  - An async_client fixture wired to the FastAPI app with get_db overridden.
  - Persisted users and auth header helpers.
"""

from __future__ import annotations

import os
import uuid
from typing import AsyncGenerator

# ---------------------------------------------------------------------------
# Environment must be set BEFORE any skillswap module is imported so that
# pydantic-settings picks up the test values.
# ---------------------------------------------------------------------------
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("POSTGRES_HOST", "localhost")
os.environ.setdefault("POSTGRES_USER", "test")
os.environ.setdefault("POSTGRES_PASSWORD", "test")
os.environ.setdefault("POSTGRES_DB", "test")
os.environ.setdefault("JWT_SECRET", "test-secret-key-that-is-long-enough-32c")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

TEST_DATABASE_URL = os.getenv(
    "TEST_DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)


# ---------------------------------------------------------------------------
# Test engine (SQLite in-memory, shared via StaticPool so every connection
# sees the same data). Built per test so each test runs on its own loop
# with a fresh schema.
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine():
    """Create the SQLite test engine and all tables."""
    # Import Base here (after env vars are set) to ensure models register.
    from skillswap.core.database import Base

    # Force all model modules to load so their tables register on Base.metadata
    import skillswap.models.user        # noqa: F401
    import skillswap.models.skill       # noqa: F401
    import skillswap.models.connection  # noqa: F401
    import skillswap.models.vouch       # noqa: F401
    import skillswap.models.message     # noqa: F401

    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


# ---------------------------------------------------------------------------
# Per-test DB session that rolls back after each test for isolation.
#
# Strategy: wrap each test in a single outer transaction that is rolled back.
# commit() is overridden to only flush, so endpoint code that calls
# session.commit() keeps its writes inside the outer transaction.
# ---------------------------------------------------------------------------
class _NonCommittingSession(AsyncSession):
    """AsyncSession subclass where commit() becomes flush().

    Endpoint handlers call ``await db.commit()`` after writes. In the test
    suite those writes must stay visible to later requests in the same test
    without being persisted, so commit() only flushes.
    """

    async def commit(self) -> None:  # type: ignore[override]
        await self.flush()


@pytest_asyncio.fixture
async def db_session(engine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a per-test database session that is fully rolled back on teardown."""
    async with engine.connect() as conn:
        await conn.begin()  # outer real transaction

        session = _NonCommittingSession(
            bind=conn,
            expire_on_commit=False,
        )

        try:
            yield session
        finally:
            await session.close()
            await conn.rollback()


# ---------------------------------------------------------------------------
# Override FastAPI database dependency to use the test session.
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Provide an httpx AsyncClient backed by the FastAPI app.

    The app's get_db dependency is overridden to yield the test session so all
    requests in a test share the same transactional session and thus see any
    data seeded in that test.
    """
    from skillswap.core.database import get_db
    from skillswap.main import app

    async def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as client:
        yield client

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Seeded fixtures
# ---------------------------------------------------------------------------
def auth_headers_for(user) -> dict[str, str]:
    """Authorization headers carrying a fresh access token for ``user``."""
    from skillswap.core.security import create_access_token
    token = create_access_token(data={"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession):
    """Persisted user acting as the caller in integration tests."""
    from tests.factories import UserFactory
    return await UserFactory.create_async(
        db_session,
        id=uuid.uuid4(),
        email="ana@example.com",
        first_name="Ana",
        last_name="Silva",
        username="ana",
        location="Lisbon, Portugal",
    )


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession):
    """A second persisted user."""
    from tests.factories import UserFactory
    return await UserFactory.create_async(
        db_session,
        email="ben@example.com",
        first_name="Ben",
        last_name="Okafor",
        username="ben",
        location="Porto, Portugal",
    )


@pytest.fixture
def auth_headers(test_user) -> dict[str, str]:
    """Authorization headers for test_user."""
    return auth_headers_for(test_user)


@pytest.fixture
def other_auth_headers(other_user) -> dict[str, str]:
    """Authorization headers for other_user."""
    return auth_headers_for(other_user)
