"""Page Shaping — pure over-fetch trim, author join and PageResult wrapping.

Invariants:
    - Input rows were fetched with limit + 1 and are already ordered
      (created_at desc, id desc); this module never reorders
    - next_offset = offset + limit iff more than limit rows were fetched
    - An empty row list is a valid last page: items == (), next_offset is None
    - join_authors never drops a message; a missing author raises
      ReferentialIntegrityError

Design Decisions:
    - PageResult is generic over the item type: global pages carry Message,
      personalized pages carry MessageWithAuthor
    - Tuples, not lists, for items: frozen dataclass stays hashable/comparable
"""

from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from feedline.core.domain_types import Author, Message, MessageWithAuthor, UserId
from feedline.core.errors import ReferentialIntegrityError
from feedline.core.page_request import PageRequest

T = TypeVar("T")


@dataclass(frozen=True)
class PageInfo:
    """Pagination metadata returned with every page."""
    offset: int
    limit: int
    next_offset: int | None = None

    @property
    def has_next(self) -> bool:
        return self.next_offset is not None


@dataclass(frozen=True)
class PageResult(Generic[T]):
    """An ordered page of items plus pagination metadata."""
    items: tuple[T, ...]
    page_info: PageInfo

    @classmethod
    def empty(cls, request: PageRequest) -> "PageResult[T]":
        return cls(
            items=(),
            page_info=PageInfo(offset=request.offset, limit=request.limit),
        )


def trim_page(rows: Sequence[T], request: PageRequest) -> PageResult[T]:
    """Trim an over-fetched row list to one page. Pure, no IO."""
    has_more = len(rows) > request.limit
    items = tuple(rows[:request.limit])
    next_offset = request.offset + request.limit if has_more else None
    return PageResult(
        items=items,
        page_info=PageInfo(
            offset=request.offset, limit=request.limit, next_offset=next_offset,
        ),
    )


def author_ids_of(messages: Sequence[Message]) -> set[UserId]:
    return {m.author_id for m in messages}


def join_authors(
    page: PageResult[Message], authors: dict[UserId, Author],
) -> PageResult[MessageWithAuthor]:
    """Attach each message's author profile, keeping order and page_info."""
    missing = sorted(
        str(a) for a in author_ids_of(page.items) if a not in authors
    )
    if missing:
        raise ReferentialIntegrityError(missing)
    return PageResult(
        items=tuple(
            MessageWithAuthor(message=m, author=authors[m.author_id])
            for m in page.items
        ),
        page_info=page.page_info,
    )
