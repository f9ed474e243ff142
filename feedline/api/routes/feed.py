"""Feed Route — the viewer's personal home feed.

Invariants:
    - Requires a bearer token (401 otherwise)
    - Only messages authored by accounts the viewer follows; each joined with
      its author's public profile
"""

from fastapi import APIRouter, Depends, Query

from feedline.api.deps import get_timeline_assembler, get_viewer_id
from feedline.core.domain_types import UserId
from feedline.core.page_request import normalize_page_request
from feedline.schemas.message import FeedResponse
from feedline.services.timeline_assembler import TimelineAssembler

router = APIRouter(prefix="/api/v1/feed", tags=["feed"])


@router.get("", response_model=FeedResponse)
async def get_personal_feed(
    limit: str | None = Query(None),
    offset: str | None = Query(None),
    max_id: str | None = Query(None),
    viewer_id: UserId = Depends(get_viewer_id),
    assembler: TimelineAssembler = Depends(get_timeline_assembler),
):
    request = normalize_page_request(limit=limit, offset=offset, max_id=max_id)
    page = await assembler.get_personal_feed(viewer_id, request)
    return FeedResponse.from_page(page)
