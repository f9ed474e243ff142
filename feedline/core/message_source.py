"""Message Sources — which authors a timeline page may draw from.

Invariants:
    - author_filter() is None for the global stream (no restriction)
    - author_filter() is a frozenset for personalized feeds; an empty set means
      "nothing visible", never "everything"
    - Sources are immutable snapshots of the follow graph taken for one page

Design Decisions:
    - Strategy objects instead of a boolean flag: the over-fetch/trim algorithm
      in services/timeline_assembler.py has a single code path for every source
"""

from dataclasses import dataclass
from typing import Protocol

from feedline.core.domain_types import FeedKind, UserId


class MessageSource(Protocol):
    """Contract for a timeline message source."""
    kind: FeedKind

    def author_filter(self) -> frozenset[UserId] | None: ...


@dataclass(frozen=True)
class GlobalSource:
    """Every message in the store."""
    kind: FeedKind = FeedKind.GLOBAL

    def author_filter(self) -> frozenset[UserId] | None:
        return None


@dataclass(frozen=True)
class FollowedAuthorsSource:
    """Messages authored by the viewer's followees."""
    followees: frozenset[UserId]
    kind: FeedKind = FeedKind.PERSONAL

    def author_filter(self) -> frozenset[UserId] | None:
        return self.followees


def is_empty_source(source: MessageSource) -> bool:
    """True when the source can never yield a message."""
    authors = source.author_filter()
    return authors is not None and not authors
