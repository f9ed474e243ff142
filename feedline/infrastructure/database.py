"""Database Session Manager — pooled async sessions, error mapping and the get_db dependency.

Invariants:
    - A session that leaves the block with a SQLAlchemy error is rolled back and
      the error re-raised as DatabaseError (core/errors.py), original chained
    - Every session is closed on every exit path
    - Repositories flush; only route handlers commit
    - pool_pre_ping on: a stale pooled connection is replaced, not handed out

Design Decisions:
    - Module-level db_manager created by the FastAPI lifespan (main.py) and
      replaced by the test fixtures; callers read it through the module
    - expire_on_commit=False: read models are built after commit without lazy loads
    - Repositories translate IntegrityError into ConflictError where it has a
      domain meaning; anything that reaches this layer is a storage fault
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from feedline.core.errors import DatabaseError

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError are DBAPIErrors
_ERROR_OPERATIONS = (
    (IntegrityError, "constraint check"),
    (OperationalError, "execute"),
    (DBAPIError, "query"),
    (SQLAlchemyError, "session"),
)


def _operation_for(exc: SQLAlchemyError) -> str:
    for exc_type, operation in _ERROR_OPERATIONS:
        if isinstance(exc, exc_type):
            return operation
    return "session"


class DatabaseSessionManager:
    """Owns the async engine and hands out error-mapped sessions."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs = {"pool_pre_ping": True}
        # SQLite (tests, local runs) uses a pool without size knobs
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            operation = _operation_for(e)
            logger.error(f"Database {operation} error: {e.__class__.__name__}: {e}")
            raise DatabaseError(e.__class__.__name__, operation) from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """True when SELECT 1 round-trips; readiness probe only."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except (DatabaseError, OSError) as e:
            logger.error(f"Database health check failed: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def close_db() -> None:
    global db_manager
    if db_manager is not None:
        await db_manager.dispose()
    db_manager = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if db_manager is None:
        raise DatabaseError("session manager not initialized", "connect")
    async with db_manager.session() as session:
        yield session
