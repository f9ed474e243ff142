"""Auth Routes — signup, login and logout.

Invariants:
    - signup commits users + user_auth together, then issues a token (201)
    - login answers "invalid credentials" for unknown name and wrong password alike
    - logout is stateless: the token is verified and nothing is stored (204)
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from feedline.api.deps import (
    get_token_service, get_user_repository, get_viewer_id,
)
from feedline.core.domain_types import UserId
from feedline.core.errors import UnauthorizedError
from feedline.infrastructure.database import get_db
from feedline.infrastructure.security import TokenService
from feedline.repositories.user_repository import UserRepository
from feedline.schemas.user import AuthResponse, Credentials, UserResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post(
    "/signup", response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def signup(
    body: Credentials,
    db: AsyncSession = Depends(get_db),
    users: UserRepository = Depends(get_user_repository),
    tokens: TokenService = Depends(get_token_service),
):
    """Create an account and return it with a bearer token."""
    author = await users.create(body.name, body.password)
    await db.commit()
    return AuthResponse(
        user=UserResponse.from_author(author), token=tokens.issue(author.id),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    body: Credentials,
    users: UserRepository = Depends(get_user_repository),
    tokens: TokenService = Depends(get_token_service),
):
    """Verify name/password and return a fresh bearer token."""
    author = await users.authenticate(body.name, body.password)
    if author is None:
        raise UnauthorizedError("invalid credentials")
    return AuthResponse(
        user=UserResponse.from_author(author), token=tokens.issue(author.id),
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(viewer_id: UserId = Depends(get_viewer_id)):
    """Stateless logout; the client discards its token."""
    logger.info("Logout", extra={"viewer_id": str(viewer_id)})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
