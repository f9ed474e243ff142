"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine
    - Password hashing uses minimum bcrypt rounds

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route and
      repository tests (PostgreSQL-specific features not exercised here)
    - StaticPool: every session shares the one in-memory connection
    - seed_* helpers write through the repositories, not raw inserts, so the
      same code paths the routes use are covered
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

import feedline.models  # noqa: F401
from feedline.api.deps import get_password_hasher
from feedline.db.base import Base
from feedline.infrastructure.database import get_db, DatabaseSessionManager
from feedline.infrastructure.security import PasswordHasher
import feedline.infrastructure.database as db_module
from feedline.main import app
from feedline.repositories.follow_repository import FollowRepository
from feedline.repositories.message_repository import MessageRepository
from feedline.repositories.user_repository import UserRepository

T0 = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
PASSWORD = "correct-horse"


@pytest.fixture
def fast_hasher():
    return PasswordHasher("bcrypt", rounds=4)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
        poolclass=StaticPool, connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory, fast_hasher):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_password_hasher] = lambda: fast_hasher

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def seed_user(test_db, fast_hasher):
    """Create a user with PASSWORD and commit. Returns the Author."""
    async def _seed(name):
        author = await UserRepository(test_db, fast_hasher).create(name, PASSWORD)
        await test_db.commit()
        return author
    return _seed


@pytest.fixture
def seed_message(test_db):
    """Post a message minutes_ago before T0 and commit. Returns the Message."""
    async def _seed(author, minutes_ago, body=None):
        message = await MessageRepository(test_db).create(
            author.id, body or f"{author.name} -{minutes_ago}m",
            created_at=T0 - timedelta(minutes=minutes_ago),
        )
        await test_db.commit()
        return message
    return _seed


@pytest.fixture
def seed_follow(test_db):
    async def _seed(follower, followee):
        await FollowRepository(test_db).follow(follower.id, followee.id)
        await test_db.commit()
    return _seed
