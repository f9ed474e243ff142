"""Boundary Protocols — contracts between the timeline core and its collaborators.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by repositories/ via dependency injection
    - scan() returns rows ordered (created_at desc, id desc), at most `limit` rows

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: boundary methods are async because implementations do IO,
      but the pure functions in core/pagination.py never are — the assembler
      orchestrates the async calls around them
    - followees() materializes the whole set: follow lists are assumed small
      enough to fit in one call, no pagination
"""

from typing import Iterable, Protocol

from feedline.core.domain_types import Author, Message, UserId


class FollowGraph(Protocol):
    """Read-only view of the follow relation."""
    async def followees(self, user_id: UserId) -> frozenset[UserId]: ...
    async def followers(self, user_id: UserId) -> frozenset[UserId]: ...


class MessageStore(Protocol):
    """Ordered range reads over the message corpus."""
    async def scan(
        self,
        author_filter: frozenset[UserId] | None,
        offset: int,
        limit: int,
    ) -> list[Message]: ...


class AuthorDirectory(Protocol):
    """Public profile lookup for the read-time author join."""
    async def get_profiles(
        self, user_ids: Iterable[UserId],
    ) -> dict[UserId, Author]: ...
