"""
Creator Swipes Backend — Test Configuration (conftest.py)
==========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped:
    ├── mock_db_session: Mock AsyncSession for service unit tests (no DB)
    ├── db: Fresh SQLite schema for endpoint tests
    ├── test_client: HTTPX AsyncClient bound to the FastAPI app (uses db)
    ├── make_user: Factory inserting users with a known password
    ├── user_password: That password, in plaintext
    └── auth_headers: Builds an Authorization header for a user
"""

import os
import tempfile
from typing import Callable, Dict, Optional
from unittest.mock import AsyncMock, MagicMock

import bcrypt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must run before any `app` import: settings are read once at import time
_TEST_DIR = tempfile.mkdtemp(prefix="creator_swipes_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/test.db"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["REQUIRE_AUTH_FOR_SWIPES"] = "false"
# The app-wide limiter would otherwise trip partway through the suite;
# tests/test_rate_limit.py exercises it with its own small limits
os.environ["RATE_LIMIT_REQUESTS"] = "1000000"

from app.auth import create_access_token  # noqa: E402
from app.database import async_session_factory, create_schema, drop_schema, engine  # noqa: E402
from app.models.user import User  # noqa: E402

TEST_PASSWORD = "correct horse battery staple"

# Cheap hash for fixtures; checkpw reads the cost from the hash itself
_TEST_PASSWORD_HASH = bcrypt.hashpw(TEST_PASSWORD.encode(), bcrypt.gensalt(rounds=4)).decode()


# ══════════════════════════════════════════════════════════════════════════
# Service Unit Test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_x(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = row
            mock_db_session.get.return_value = user
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock(return_value=None)
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Endpoint Test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db():
    """Recreates every table before the test and drops them afterwards."""
    await drop_schema()
    await create_schema()
    yield
    await drop_schema()
    await engine.dispose()


@pytest_asyncio.fixture
async def test_client(db):
    """
    HTTPX AsyncClient routed straight into the ASGI app.

    Usage:
        async def test_home(test_client):
            response = await test_client.get("/")
            assert response.status_code == 200
    """
    from app.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def user_password() -> str:
    """Plaintext password shared by every user from make_user."""
    return TEST_PASSWORD


@pytest.fixture
def make_user(db) -> Callable:
    """
    Factory fixture: `await make_user("alice", max_collections=1)`.

    Every user's password is TEST_PASSWORD.
    """

    async def _make_user(username: str = "creator", **fields) -> User:
        user = User(username=username, password=_TEST_PASSWORD_HASH, **fields)
        async with async_session_factory() as session:
            session.add(user)
            await session.commit()
        return user

    return _make_user


@pytest.fixture
def auth_headers() -> Callable[[User], Dict[str, str]]:
    """Builds {"Authorization": <token>} for a user, in the raw (no scheme) format."""

    def _headers(user: User, token: Optional[str] = None) -> Dict[str, str]:
        return {"Authorization": token or create_access_token(user.id)}

    return _headers
