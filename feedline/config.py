"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every field can be set from an environment variable of the same name
      (case-insensitive) or from .env
    - get_settings() is cached: one Settings per process, so TokenService and
      the session manager agree on what they were built from
    - The JWT signing key reaches TokenService only through its constructor;
      an empty key fails at startup, not at first login

Design Decisions:
    - Pagination bounds are not settings: they are part of the API contract and
      live in core/domain_types.py
    - Defaults target the docker-compose stack; only jwt_secret_key must change
      in production
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Feedline runtime settings."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Storage
    database_url: str = "postgresql+asyncpg://feedline:feedline@db:5432/feedline"
    database_pool_size: int = Field(20, ge=1)
    database_max_overflow: int = Field(10, ge=0)

    # Identity
    jwt_secret_key: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_ttl_hours: int = Field(24, ge=1)
    password_hash_scheme: str = "bcrypt"

    # HTTP
    cors_origins: list[str] = ["http://localhost:8081"]

    # Logging
    log_level: str = "INFO"
    log_format: str = Field("json", pattern="^(json|text)$")

    @field_validator("database_url", mode="before")
    @classmethod
    def use_asyncpg_driver(cls, v):
        # Managed Postgres hands out postgresql://; the engine is async-only
        if isinstance(v, str) and v.startswith("postgresql://"):
            return "postgresql+asyncpg://" + v[len("postgresql://"):]
        return v

    @field_validator("jwt_secret_key")
    @classmethod
    def secret_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("jwt_secret_key must not be blank")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
