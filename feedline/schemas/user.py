"""User Schemas — public profile responses and signup/login bodies.

Invariants:
    - name: 1-50 chars, stripped, non-empty
    - password: 8-128 chars, never echoed back
    - Responses never include credentials
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from feedline.core.domain_types import Author, MAX_USER_NAME_LENGTH


class Credentials(BaseModel):
    """Signup and login body."""
    name: str = Field(min_length=1, max_length=MAX_USER_NAME_LENGTH)
    password: str = Field(min_length=8, max_length=128)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        if not isinstance(v, str):
            return v
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class UserResponse(BaseModel):
    """Public profile."""
    id: UUID
    name: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_author(cls, author: Author) -> "UserResponse":
        return cls(
            id=author.id, name=author.name,
            created_at=author.created_at, updated_at=author.updated_at,
        )


class UserListResponse(BaseModel):
    users: list[UserResponse]


class AuthResponse(BaseModel):
    """Signup/login result: the profile plus a bearer token."""
    user: UserResponse
    token: str
