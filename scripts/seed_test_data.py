"""Seed Test Data — bulk users, messages and follows for load testing the timeline.

Invariants:
    - Generated users are named user_0000 .. user_NNNN; the script refuses to
      run twice unless --clean is used first
    - Messages are assigned round-robin to users and spread evenly over the
      last 30 days, so authors interleave in time
    - No self-follows; each user follows --follows-per-user distinct others

Usage:
    python -m scripts.seed_test_data [--users N] [--messages-per-user N]
                                     [--follows-per-user N] [--clean]
"""

import argparse
import asyncio
import logging
import random
from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from feedline.config import get_settings
from feedline.db.base import time_ordered_uuid
from feedline.db.session import create_session_factory
from feedline.infrastructure.observability import setup_logging
from feedline.infrastructure.security import PasswordHasher
from feedline.models.follow import Follow
from feedline.models.message import Message
from feedline.models.user import User
from feedline.models.user_auth import UserAuth

logger = logging.getLogger(__name__)

NAME_PREFIX = "user_"
SPAN = timedelta(days=30)
BATCH_SIZE = 5_000


async def generate(
    db: AsyncSession, n_users: int, messages_per_user: int, follows_per_user: int,
) -> None:
    existing = await db.scalar(
        select(func.count()).select_from(User).where(User.name.like(f"{NAME_PREFIX}%")),
    )
    if existing:
        logger.warning(
            f"Test data already present ({existing} users); run with --clean first",
        )
        return

    # bcrypt is slow; hash once and reuse
    hashed = PasswordHasher().hash("password123")
    now = datetime.now(timezone.utc)
    user_ids = [time_ordered_uuid() for _ in range(n_users)]

    await _insert_batched(db, User, [
        {"id": uid, "name": f"{NAME_PREFIX}{i:04d}", "created_at": now, "updated_at": now}
        for i, uid in enumerate(user_ids)
    ])
    await _insert_batched(db, UserAuth, [
        {"user_id": uid, "hashed_password": hashed, "created_at": now, "updated_at": now}
        for uid in user_ids
    ])
    logger.info(f"[1/3] users: {n_users}")

    total = n_users * messages_per_user
    base = now - SPAN
    messages = []
    for i in range(total):
        author_idx = i % n_users
        created_at = base + SPAN * (i / total)
        messages.append({
            "id": time_ordered_uuid(),
            "author_id": user_ids[author_idx],
            "body": f"Message #{i} from {NAME_PREFIX}{author_idx:04d}",
            "like_count": random.randint(0, 99),
            "created_at": created_at,
            "updated_at": created_at,
        })
    await _insert_batched(db, Message, messages)
    logger.info(f"[2/3] messages: {total}")

    follows = []
    for i, follower in enumerate(user_ids):
        others = [uid for j, uid in enumerate(user_ids) if j != i]
        for followee in random.sample(others, min(follows_per_user, len(others))):
            follows.append({
                "follower_id": follower, "followee_id": followee, "created_at": now,
            })
    await _insert_batched(db, Follow, follows)
    logger.info(f"[3/3] follows: {len(follows)}")

    await db.commit()


async def clean(db: AsyncSession) -> None:
    generated = select(User.id).where(User.name.like(f"{NAME_PREFIX}%"))
    # messages.author_id has no ON DELETE CASCADE, so delete them first
    msg_result = await db.execute(
        delete(Message).where(Message.author_id.in_(generated)),
    )
    await db.execute(
        delete(Follow).where(
            Follow.follower_id.in_(generated) | Follow.followee_id.in_(generated),
        ),
    )
    await db.execute(delete(UserAuth).where(UserAuth.user_id.in_(generated)))
    user_result = await db.execute(
        delete(User).where(User.name.like(f"{NAME_PREFIX}%")),
    )
    await db.commit()
    logger.info(
        f"Removed {user_result.rowcount} users and {msg_result.rowcount} messages",
    )


async def _insert_batched(db: AsyncSession, model, rows: list[dict]) -> None:
    for start in range(0, len(rows), BATCH_SIZE):
        await db.execute(insert(model), rows[start:start + BATCH_SIZE])


async def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--users", type=int, default=1000)
    parser.add_argument("--messages-per-user", type=int, default=100)
    parser.add_argument("--follows-per-user", type=int, default=50)
    parser.add_argument("--clean", action="store_true")
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(settings.log_level, "text")
    engine, factory = create_session_factory(settings.database_url)
    try:
        async with factory() as db:
            if args.clean:
                await clean(db)
            else:
                await generate(
                    db, args.users, args.messages_per_user, args.follows_per_user,
                )
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
