"""Message ORM — the append-mostly, time-ordered message corpus.

Invariants:
    - id is UUIDv7 (monotonic with creation time): (created_at, id) is a total order
    - Rows are never deleted or edited by the timeline core; like_count is the
      only mutable column and nothing in this service changes it
    - author_id always references an existing user

Design Decisions:
    - Composite indexes match the two timeline scans: global
      (created_at, id) and per-author (author_id, created_at, id)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Text, Integer, DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from feedline.core.domain_types import Message as MessageRecord, MessageId, UserId
from feedline.db.base import Base, time_ordered_uuid


class Message(Base):
    """A posted message."""
    __tablename__ = "messages"
    __table_args__ = (
        Index("ix_messages_created_at_id", "created_at", "id"),
        Index("ix_messages_author_created_at_id", "author_id", "created_at", "id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=time_ordered_uuid,
    )
    author_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False,
    )
    body: Mapped[str] = mapped_column(Text, nullable=False)
    like_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def to_record(self) -> MessageRecord:
        return MessageRecord(
            id=MessageId(self.id),
            author_id=UserId(self.author_id),
            body=self.body,
            like_count=self.like_count,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
