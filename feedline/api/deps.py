"""API Dependencies — viewer identity, token service and timeline assembler wiring.

Invariants:
    - get_viewer_id raises UnauthorizedError when the bearer token is absent or invalid
    - One AsyncSession per request, shared by every repository built for it

Design Decisions:
    - TokenService built from Settings per process (lru_cache), overridable in tests
      through app.dependency_overrides
"""

from functools import lru_cache

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from feedline.config import get_settings
from feedline.core.domain_types import UserId
from feedline.core.errors import UnauthorizedError
from feedline.infrastructure.database import get_db
from feedline.infrastructure.security import PasswordHasher, TokenService
from feedline.repositories.follow_repository import FollowRepository
from feedline.repositories.message_repository import MessageRepository
from feedline.repositories.user_repository import UserRepository
from feedline.services.timeline_assembler import TimelineAssembler

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_token_service() -> TokenService:
    return TokenService.from_settings(get_settings())


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(get_settings().password_hash_scheme)


def get_viewer_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> UserId:
    """Verified viewer id from the Authorization header."""
    if credentials is None:
        raise UnauthorizedError("token is not set")
    return tokens.verify(credentials.credentials)


def get_user_repository(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserRepository:
    return UserRepository(db, hasher)


def get_timeline_assembler(
    db: AsyncSession = Depends(get_db),
) -> TimelineAssembler:
    return TimelineAssembler(
        messages=MessageRepository(db),
        follow_graph=FollowRepository(db),
        authors=UserRepository(db),
    )
