"""
Noteful Backend — Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   The app's engine is pointed at a throwaway SQLite file (aiosqlite)
       before anything from `app` is imported; each test that asks for
       `db_engine` gets freshly created tables.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for tests that must not hit a DB
    ├── db_engine:       creates/drops every table around the test
    ├── db_session:      real AsyncSession on the test database
    ├── test_client:     HTTPX AsyncClient talking to the ASGI app
    ├── make_user / make_folder / make_tag / make_note: committed records
    └── auth_headers:    builds `Authorization: Bearer ...` for a user
"""

import os
import tempfile

# Must run before any `app` import: settings and the engine read these once.
_test_dir = tempfile.mkdtemp(prefix="noteful_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_test_dir, 'test.db')}"
os.environ["JWT_SECRET"] = "test-secret-not-for-production"
os.environ["JWT_EXPIRY"] = "3600"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import Iterable, Optional  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.database import Base, async_session_factory, engine  # noqa: E402
from app.models import Folder, Note, Tag, User  # noqa: E402
from app.schemas.auth import AuthUser  # noqa: E402
from app.services.auth_service import auth_service  # noqa: E402

# Hashing is slow on purpose; compute the shared fixture password once.
TEST_PASSWORD = "correct-horse-battery"
_TEST_PASSWORD_HASH = auth_service.hash_password(TEST_PASSWORD)


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_x(mock_db_session):
            ...
            mock_db_session.execute.assert_not_awaited()
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def db_engine():
    """Fresh schema for one test; pooled connections are dropped afterwards."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    # aiosqlite connections belong to the event loop that opened them
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    async with async_session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_client(db_engine):
    """
    HTTPX AsyncClient configured to talk to the FastAPI app in-process.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from app.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ══════════════════════════════════════════════════════════════════════════
# Record factories (each commits, so the app's own sessions see the rows)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def make_user(db_engine):
    async def _make(username: str = "alice", fullname: Optional[str] = None) -> User:
        async with async_session_factory() as session:
            user = User(username=username, fullname=fullname, password=_TEST_PASSWORD_HASH)
            session.add(user)
            await session.commit()
            return user

    return _make


@pytest.fixture
def make_folder(db_engine):
    async def _make(user: User, name: str = "Work") -> Folder:
        async with async_session_factory() as session:
            folder = Folder(name=name, user_id=user.id)
            session.add(folder)
            await session.commit()
            return folder

    return _make


@pytest.fixture
def make_tag(db_engine):
    async def _make(user: User, name: str = "urgent") -> Tag:
        async with async_session_factory() as session:
            tag = Tag(name=name, user_id=user.id)
            session.add(tag)
            await session.commit()
            return tag

    return _make


@pytest.fixture
def make_note(db_engine):
    async def _make(
        user: User,
        title: str = "Groceries",
        content: Optional[str] = None,
        folder: Optional[Folder] = None,
        tags: Iterable[Tag] = (),
        **extra,
    ) -> Note:
        async with async_session_factory() as session:
            attached = [await session.get(Tag, tag.id) for tag in tags]
            note = Note(
                title=title,
                content=content,
                user_id=user.id,
                folder_id=folder.id if folder else None,
                tags=attached,
                **extra,
            )
            session.add(note)
            await session.commit()
            return note

    return _make


@pytest.fixture
def auth_headers():
    def _headers(user: User) -> dict:
        token = auth_service.create_auth_token(AuthUser(id=user.id, username=user.username))
        return {"Authorization": f"Bearer {token}"}

    return _headers
