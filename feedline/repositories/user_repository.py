"""User Repository — accounts, credentials and the AuthorDirectory implementation.

Invariants:
    - create() writes users and user_auth in one unit of work (flush, caller commits)
    - Duplicate name -> ConflictError, never a DatabaseError
    - get_profiles() returns only ids that exist; absent ids are simply missing
      from the dict (the caller decides whether that is an integrity failure)
    - A user without a user_auth row is an upstream integrity fault -> InternalError
"""

import logging
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from feedline.core.domain_types import Author, UserId
from feedline.core.errors import ConflictError, InternalError
from feedline.infrastructure.security import PasswordHasher
from feedline.models.user import User
from feedline.models.user_auth import UserAuth

logger = logging.getLogger(__name__)


class UserRepository:
    """SQLAlchemy-backed user storage."""

    def __init__(self, db: AsyncSession, hasher: PasswordHasher | None = None):
        self.db = db
        self.hasher = hasher or PasswordHasher()

    async def create(self, name: str, password: str) -> Author:
        if await self.get_by_name(name) is not None:
            raise ConflictError("user name is already used")

        user = User(name=name)
        self.db.add(user)
        try:
            await self.db.flush()
            self.db.add(UserAuth(
                user_id=user.id, hashed_password=self.hasher.hash(password),
            ))
            await self.db.flush()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("user name is already used")
        logger.info("User created", extra={"viewer_id": str(user.id)})
        return user.to_author()

    async def get_by_name(self, name: str) -> Author | None:
        result = await self.db.execute(select(User).where(User.name == name))
        user = result.scalar_one_or_none()
        return user.to_author() if user else None

    async def get_by_id(self, user_id: UserId) -> Author | None:
        user = await self.db.get(User, user_id)
        return user.to_author() if user else None

    async def exists(self, user_id: UserId) -> bool:
        return await self.get_by_id(user_id) is not None

    async def authenticate(self, name: str, password: str) -> Author | None:
        """Return the author if name/password match, else None."""
        author = await self.get_by_name(name)
        if author is None:
            return None
        auth = await self.db.get(UserAuth, author.id)
        if auth is None:
            # A user row without credentials means signup was half-written.
            raise InternalError("failed to find auth data")
        if not self.hasher.verify(password, auth.hashed_password):
            return None
        return author

    async def get_profiles(
        self, user_ids: Iterable[UserId],
    ) -> dict[UserId, Author]:
        ids = set(user_ids)
        if not ids:
            return {}
        result = await self.db.execute(select(User).where(User.id.in_(sorted(ids))))
        return {
            UserId(u.id): u.to_author() for u in result.scalars().all()
        }
