"""Message Repository — posting and the ordered MessageStore scan.

Invariants:
    - scan() orders by (created_at desc, id desc) — never by created_at alone
    - scan() with author_filter=None reads the global stream; with a set it reads
      only those authors; with an empty set it returns [] without a query
    - Messages are inserted once and never updated or deleted here
"""

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from feedline.core.domain_types import Message, UserId
from feedline.models.message import Message as MessageModel


class MessageRepository:
    """SQLAlchemy-backed message storage."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self, author_id: UserId, body: str, created_at: datetime | None = None,
    ) -> Message:
        now = created_at or datetime.now(timezone.utc)
        row = MessageModel(
            author_id=author_id, body=body, like_count=0,
            created_at=now, updated_at=now,
        )
        self.db.add(row)
        await self.db.flush()
        return row.to_record()

    async def scan(
        self,
        author_filter: frozenset[UserId] | None,
        offset: int,
        limit: int,
    ) -> list[Message]:
        if author_filter is not None and not author_filter:
            return []
        query = select(MessageModel).order_by(
            MessageModel.created_at.desc(), MessageModel.id.desc(),
        )
        if author_filter is not None:
            query = query.where(MessageModel.author_id.in_(sorted(author_filter)))
        query = query.offset(offset).limit(limit)

        result = await self.db.execute(query)
        return [row.to_record() for row in result.scalars().all()]
