"""User ORM — public profile of an account.

Invariants:
    - id is a UUIDv7 primary key
    - name is unique, 1-50 chars (length checked in schemas/user.py)
    - Credentials live in user_auth, never on this row
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from feedline.core.domain_types import Author, MAX_USER_NAME_LENGTH, UserId
from feedline.db.base import Base, time_ordered_uuid


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """Account public profile."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=time_ordered_uuid,
    )
    name: Mapped[str] = mapped_column(
        String(MAX_USER_NAME_LENGTH), nullable=False, unique=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
        onupdate=_utcnow,
    )

    def to_author(self) -> Author:
        return Author(
            id=UserId(self.id),
            name=self.name,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
