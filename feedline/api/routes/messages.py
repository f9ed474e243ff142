"""Message Routes — post a message and read the global timeline.

Invariants:
    - limit/offset/max_id reach core/page_request.py as raw strings; FastAPI
      does not coerce or bound them
    - The global timeline is public (no token needed)
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from feedline.api.deps import get_timeline_assembler, get_viewer_id
from feedline.core.domain_types import UserId
from feedline.core.page_request import normalize_page_request
from feedline.infrastructure.database import get_db
from feedline.repositories.message_repository import MessageRepository
from feedline.schemas.message import (
    MessageCreate, MessageResponse, TimelineResponse,
)
from feedline.services.timeline_assembler import TimelineAssembler

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/messages", tags=["messages"])


@router.post(
    "", response_model=MessageResponse, status_code=status.HTTP_201_CREATED,
)
async def post_message(
    body: MessageCreate,
    viewer_id: UserId = Depends(get_viewer_id),
    db: AsyncSession = Depends(get_db),
):
    """Publish a message authored by the viewer."""
    message = await MessageRepository(db).create(viewer_id, body.body)
    await db.commit()
    logger.info("Message posted", extra={"viewer_id": str(viewer_id)})
    return MessageResponse.from_message(message)


@router.get("", response_model=TimelineResponse)
async def get_global_timeline(
    limit: str | None = Query(None),
    offset: str | None = Query(None),
    max_id: str | None = Query(None),
    assembler: TimelineAssembler = Depends(get_timeline_assembler),
):
    """Newest-first page over every message."""
    request = normalize_page_request(limit=limit, offset=offset, max_id=max_id)
    page = await assembler.get_global_timeline(request)
    return TimelineResponse.from_page(page)
