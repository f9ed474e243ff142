"""User Routes — profiles, follower listings and follow/unfollow.

Invariants:
    - GET /me requires a bearer token; 404 if the token's user no longer exists
    - follow/unfollow are idempotent and always answer 204 on success
    - Listings are ordered most-recent edge first
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from feedline.api.deps import get_user_repository, get_viewer_id
from feedline.core.domain_types import Author, UserId
from feedline.core.errors import ResourceNotFoundError
from feedline.infrastructure.database import get_db
from feedline.repositories.follow_repository import FollowRepository
from feedline.repositories.user_repository import UserRepository
from feedline.schemas.user import UserListResponse, UserResponse

router = APIRouter(prefix="/api/v1", tags=["users"])


async def get_user_or_404(users: UserRepository, user_id: UUID) -> Author:
    author = await users.get_by_id(UserId(user_id))
    if author is None:
        raise ResourceNotFoundError("User", str(user_id))
    return author


@router.get("/me", response_model=UserResponse)
async def get_me(
    viewer_id: UserId = Depends(get_viewer_id),
    users: UserRepository = Depends(get_user_repository),
):
    return UserResponse.from_author(await get_user_or_404(users, viewer_id))


@router.get("/users/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: UUID, users: UserRepository = Depends(get_user_repository),
):
    return UserResponse.from_author(await get_user_or_404(users, user_id))


@router.get("/users/{user_id}/followers", response_model=UserListResponse)
async def list_followers(
    user_id: UUID,
    db: AsyncSession = Depends(get_db),
    users: UserRepository = Depends(get_user_repository),
):
    await get_user_or_404(users, user_id)
    profiles = await FollowRepository(db).list_follower_profiles(UserId(user_id))
    return UserListResponse(users=[UserResponse.from_author(p) for p in profiles])


@router.get("/users/{user_id}/followees", response_model=UserListResponse)
async def list_followees(
    user_id: UUID,
    db: AsyncSession = Depends(get_db),
    users: UserRepository = Depends(get_user_repository),
):
    await get_user_or_404(users, user_id)
    profiles = await FollowRepository(db).list_followee_profiles(UserId(user_id))
    return UserListResponse(users=[UserResponse.from_author(p) for p in profiles])


@router.post("/users/{user_id}/follow", status_code=status.HTTP_204_NO_CONTENT)
async def follow_user(
    user_id: UUID,
    viewer_id: UserId = Depends(get_viewer_id),
    db: AsyncSession = Depends(get_db),
):
    await FollowRepository(db).follow(viewer_id, UserId(user_id))
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/users/{user_id}/follow", status_code=status.HTTP_204_NO_CONTENT)
async def unfollow_user(
    user_id: UUID,
    viewer_id: UserId = Depends(get_viewer_id),
    db: AsyncSession = Depends(get_db),
):
    await FollowRepository(db).unfollow(viewer_id, UserId(user_id))
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
