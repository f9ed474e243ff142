"""Follow Repository — follow/unfollow and the FollowGraph implementation.

Invariants:
    - follow() and unfollow() are idempotent, including two concurrent follows
      of the same pair (the primary-key violation means "already followed")
    - Self-follow -> ValidationError; unknown followee -> ResourceNotFoundError
    - Profile listings are ordered by edge created_at desc (most recent first)
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from feedline.core.domain_types import Author, UserId
from feedline.core.errors import ResourceNotFoundError, ValidationError
from feedline.models.follow import Follow
from feedline.models.user import User

logger = logging.getLogger(__name__)


class FollowRepository:
    """SQLAlchemy-backed follow graph."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def follow(self, follower_id: UserId, followee_id: UserId) -> None:
        if follower_id == followee_id:
            raise ValidationError("cannot follow yourself", field="user_id")
        if await self.db.get(User, followee_id) is None:
            raise ResourceNotFoundError("User", str(followee_id))
        if await self.db.get(Follow, (follower_id, followee_id)) is not None:
            return
        self.db.add(Follow(follower_id=follower_id, followee_id=followee_id))
        try:
            await self.db.flush()
        except IntegrityError:
            # A concurrent request inserted the same edge first
            await self.db.rollback()
            logger.info(
                "Follow edge already present", extra={"viewer_id": str(follower_id)},
            )

    async def unfollow(self, follower_id: UserId, followee_id: UserId) -> None:
        await self.db.execute(
            delete(Follow)
            .where(Follow.follower_id == follower_id)
            .where(Follow.followee_id == followee_id),
        )

    async def followees(self, user_id: UserId) -> frozenset[UserId]:
        result = await self.db.execute(
            select(Follow.followee_id).where(Follow.follower_id == user_id),
        )
        return frozenset(UserId(i) for i in result.scalars().all())

    async def followers(self, user_id: UserId) -> frozenset[UserId]:
        result = await self.db.execute(
            select(Follow.follower_id).where(Follow.followee_id == user_id),
        )
        return frozenset(UserId(i) for i in result.scalars().all())

    async def list_followee_profiles(self, user_id: UserId) -> list[Author]:
        result = await self.db.execute(
            select(User)
            .join(Follow, User.id == Follow.followee_id)
            .where(Follow.follower_id == user_id)
            .order_by(Follow.created_at.desc()),
        )
        return [u.to_author() for u in result.scalars().all()]

    async def list_follower_profiles(self, user_id: UserId) -> list[Author]:
        result = await self.db.execute(
            select(User)
            .join(Follow, User.id == Follow.follower_id)
            .where(Follow.followee_id == user_id)
            .order_by(Follow.created_at.desc()),
        )
        return [u.to_author() for u in result.scalars().all()]
