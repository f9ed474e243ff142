"""Domain Types — identity types, value objects and enums for the timeline core.

Invariants:
    - UserId and MessageId wrap UUIDs — never use bare UUID in domain logic
    - MessageId values are UUIDv7: monotonically increasing with creation time
    - Message, Author and MessageWithAuthor are immutable once built
    - Pagination bounds live here and nowhere else

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Frozen dataclasses for read models: assembled pages can be compared by value
      (idempotence checks compare whole PageResults)
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
MessageId = NewType("MessageId", UUID)


# ─── Pagination Bounds ───────────────────────────────────────────

DEFAULT_PAGE_LIMIT = 20
MIN_PAGE_LIMIT = 1
MAX_PAGE_LIMIT = 100
DEFAULT_PAGE_OFFSET = 0

MAX_MESSAGE_LENGTH = 280
MAX_USER_NAME_LENGTH = 50


# ─── Enums ───────────────────────────────────────────────────────

class PaginationMode(str, Enum):
    """How a PageRequest positions itself in the ordered stream."""
    OFFSET = "offset"
    ABSOLUTE_CURSOR = "absolute_cursor"


class FeedKind(str, Enum):
    """Which message source a page was assembled from — used in log records."""
    GLOBAL = "global"
    PERSONAL = "personal"


# ─── Read Models ─────────────────────────────────────────────────

@dataclass(frozen=True)
class Author:
    """Public profile of a message author (no credentials)."""
    id: UserId
    name: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Message:
    """A posted message as stored."""
    id: MessageId
    author_id: UserId
    body: str
    like_count: int
    created_at: datetime
    updated_at: datetime

    @property
    def ordering_key(self) -> tuple[datetime, UUID]:
        """Sort key for the timeline; sort with reverse=True for newest-first."""
        return (self.created_at, self.id)


@dataclass(frozen=True)
class MessageWithAuthor:
    """A message joined with its author's public profile at read time."""
    message: Message
    author: Author
