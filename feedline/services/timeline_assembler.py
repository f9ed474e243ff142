"""Timeline Assembler — global stream and personal feed pages via over-fetch and trim.

Invariants:
    - Stateless: no caches, no locks; every call reads its collaborators afresh
    - Reads limit + 1 rows and never issues a count query
    - Ordering key is always (created_at desc, id desc), enforced by MessageStore
    - Absolute-cursor requests raise UnsupportedError — never fall back to offset
    - Exactly one outcome per call: a complete PageResult or one FeedlineError
    - Collaborator failures that are not FeedlineErrors surface as InternalError

Design Decisions:
    - Offset pagination: a message inserted between two page fetches shifts
      later offsets, so a row can be skipped or repeated across pages. This is
      kept as documented behaviour (tests/services/test_timeline_assembler.py)
    - The follow-graph read and the message read are separate calls with no
      shared transaction; a follow change in between may show up inconsistently
    - Empty followee set short-circuits before the message store is touched
"""

import logging

from feedline.core.domain_types import (
    FeedKind, Message, MessageWithAuthor, UserId,
)
from feedline.core.errors import (
    FeedlineError, InternalError, UnauthorizedError, UnsupportedError,
    ValidationError, ErrorContext,
)
from feedline.core.message_source import (
    FollowedAuthorsSource, GlobalSource, MessageSource, is_empty_source,
)
from feedline.core.page_request import PageRequest
from feedline.core.pagination import (
    PageResult, author_ids_of, join_authors, trim_page,
)
from feedline.core.repository_protocols import (
    AuthorDirectory, FollowGraph, MessageStore,
)

logger = logging.getLogger(__name__)


class TimelineAssembler:
    """Builds timeline pages from a message store and a follow graph."""

    def __init__(
        self,
        messages: MessageStore,
        follow_graph: FollowGraph,
        authors: AuthorDirectory,
    ):
        self.messages = messages
        self.follow_graph = follow_graph
        self.authors = authors

    async def get_global_timeline(
        self, request: PageRequest,
    ) -> PageResult[Message]:
        """Newest-first page over every message."""
        self._check_request(request)
        page = await self._read_page(GlobalSource(), request)
        self._log_page(FeedKind.GLOBAL, request, page)
        return page

    async def get_personal_feed(
        self, viewer_id: UserId | None, request: PageRequest,
    ) -> PageResult[MessageWithAuthor]:
        """Newest-first page over messages authored by the viewer's followees."""
        if viewer_id is None:
            raise UnauthorizedError("viewer identity required for personal feed")
        self._check_request(request, viewer_id)

        followees = await self._guarded(
            self.follow_graph.followees(viewer_id), "follow graph read",
        )
        source = FollowedAuthorsSource(frozenset(followees))
        page = await self._read_page(source, request)
        if not page.items:
            joined: PageResult[MessageWithAuthor] = PageResult(
                items=(), page_info=page.page_info,
            )
        else:
            profiles = await self._guarded(
                self.authors.get_profiles(author_ids_of(page.items)),
                "author lookup",
            )
            joined = join_authors(page, profiles)
        self._log_page(FeedKind.PERSONAL, request, joined, viewer_id)
        return joined

    # --- internals ------------------------------------------------------------

    def _check_request(
        self, request: PageRequest, viewer_id: UserId | None = None,
    ) -> None:
        ctx = ErrorContext(viewer_id=str(viewer_id) if viewer_id else None)
        if request.has_conflicting_modes:
            raise ValidationError(
                "mutually exclusive pagination modes", field="max_id",
                context=ctx,
            )
        if request.absolute_cursor is not None:
            # TODO: keyset mode once the max_id ordering key is settled
            # (global (created_at, id) vs per-author); see DESIGN.md.
            raise UnsupportedError("absolute-cursor pagination", context=ctx)

    async def _read_page(
        self, source: MessageSource, request: PageRequest,
    ) -> PageResult[Message]:
        if is_empty_source(source):
            return PageResult.empty(request)
        rows = await self._guarded(
            self.messages.scan(
                source.author_filter(), request.offset, request.fetch_size,
            ),
            "message scan",
        )
        return trim_page(rows, request)

    async def _guarded(self, awaitable, operation: str):
        """Await a collaborator call, classifying foreign failures as internal."""
        try:
            return await awaitable
        except FeedlineError:
            raise
        except Exception as e:
            logger.error(f"Timeline {operation} failed: {e}", exc_info=True)
            raise InternalError(f"timeline {operation} failed") from e

    @staticmethod
    def _log_page(
        kind: FeedKind, request: PageRequest, page: PageResult,
        viewer_id: UserId | None = None,
    ) -> None:
        logger.debug(
            f"Assembled {kind.value} page",
            extra={
                "viewer_id": str(viewer_id) if viewer_id else None,
                "offset": request.offset,
                "limit": request.limit,
                "item_count": len(page.items),
            },
        )
