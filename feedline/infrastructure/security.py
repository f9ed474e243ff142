"""Token & Password Security — JWT issuance/verification and password hashing.

Invariants:
    - Tokens are HS256-signed JWTs carrying user_id, iat, exp
    - Any verification failure (bad signature, wrong algorithm, expired,
      malformed, missing/invalid user_id) raises UnauthorizedError
    - Plain passwords are never stored or logged

Design Decisions:
    - Signing key, algorithm and TTL are constructor arguments built from
      Settings; there is no module-level secret
    - PyJWT for tokens, passlib CryptContext for bcrypt hashing
"""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt
from passlib.context import CryptContext

from feedline.config import Settings
from feedline.core.domain_types import UserId
from feedline.core.errors import UnauthorizedError

logger = logging.getLogger(__name__)


class TokenService:
    """Issues and verifies bearer tokens for the viewer identity."""

    def __init__(
        self, secret_key: str, algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=24),
    ):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._ttl = ttl

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            ttl=timedelta(hours=settings.jwt_ttl_hours),
        )

    def issue(self, user_id: UserId, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "user_id": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self._ttl,
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str | None) -> UserId:
        """Return the viewer id carried by the token or raise UnauthorizedError."""
        if not token:
            raise UnauthorizedError("token is not set")
        try:
            claims = jwt.decode(
                token, self._secret_key, algorithms=[self._algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise UnauthorizedError("token expired")
        except jwt.InvalidTokenError as e:
            logger.info(f"Rejected bearer token: {e}")
            raise UnauthorizedError("invalid token")

        raw_user_id = claims.get("user_id")
        if not isinstance(raw_user_id, str):
            raise UnauthorizedError("user_id is not found in token")
        try:
            return UserId(UUID(raw_user_id))
        except ValueError:
            raise UnauthorizedError("invalid token")


class PasswordHasher:
    """Thin wrapper over passlib so the scheme comes from Settings."""

    def __init__(self, scheme: str = "bcrypt", rounds: int | None = None):
        settings = {f"{scheme}__rounds": rounds} if rounds else {}
        self._context = CryptContext(
            schemes=[scheme], deprecated="auto", **settings,
        )

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, hashed_password: str) -> bool:
        return self._context.verify(password, hashed_password)
