"""Message & Timeline Schemas — post body and paginated timeline responses.

Invariants:
    - MessageCreate.body: 1-280 chars, counted after stripping
    - pagination.next_offset is null on the last page, never a sentinel number
    - Feed items carry a nested author; global timeline items do not

Design Decisions:
    - Built from core PageResult via from_page(): the route never touches
      PageInfo fields directly
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from feedline.core.domain_types import (
    MAX_MESSAGE_LENGTH, Message, MessageWithAuthor,
)
from feedline.core.pagination import PageInfo, PageResult
from feedline.schemas.user import UserResponse


class MessageCreate(BaseModel):
    """New message body."""
    body: str = Field(min_length=1, max_length=MAX_MESSAGE_LENGTH)

    # Runs before the length bounds, so padding does not count toward them
    @field_validator("body", mode="before")
    @classmethod
    def strip_body(cls, v):
        if not isinstance(v, str):
            return v
        v = v.strip()
        if not v:
            raise ValueError("body cannot be empty or whitespace")
        return v


class MessageResponse(BaseModel):
    id: UUID
    author_id: UUID
    body: str
    like_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_message(cls, message: Message) -> "MessageResponse":
        return cls(
            id=message.id,
            author_id=message.author_id,
            body=message.body,
            like_count=message.like_count,
            created_at=message.created_at,
            updated_at=message.updated_at,
        )


class AuthoredMessageResponse(MessageResponse):
    author: UserResponse

    @classmethod
    def from_joined(cls, item: MessageWithAuthor) -> "AuthoredMessageResponse":
        base = MessageResponse.from_message(item.message)
        return cls(
            **base.model_dump(), author=UserResponse.from_author(item.author),
        )


class PaginationResponse(BaseModel):
    offset: int
    limit: int
    next_offset: int | None = None

    @classmethod
    def from_page_info(cls, info: PageInfo) -> "PaginationResponse":
        return cls(
            offset=info.offset, limit=info.limit, next_offset=info.next_offset,
        )


class TimelineResponse(BaseModel):
    """Global timeline page."""
    messages: list[MessageResponse]
    pagination: PaginationResponse

    @classmethod
    def from_page(cls, page: PageResult[Message]) -> "TimelineResponse":
        return cls(
            messages=[MessageResponse.from_message(m) for m in page.items],
            pagination=PaginationResponse.from_page_info(page.page_info),
        )


class FeedResponse(BaseModel):
    """Personal feed page."""
    messages: list[AuthoredMessageResponse]
    pagination: PaginationResponse

    @classmethod
    def from_page(cls, page: PageResult[MessageWithAuthor]) -> "FeedResponse":
        return cls(
            messages=[AuthoredMessageResponse.from_joined(i) for i in page.items],
            pagination=PaginationResponse.from_page_info(page.page_info),
        )
