"""Error Hierarchy — one exception family for every way a Feedline call can fail.

Invariants:
    - Each class fixes its code, category, severity and HTTP status as class
      attributes; instances only add a message and context
    - 4xx classes describe the caller's input; 5xx classes never describe it
    - A failed timeline call raises exactly one of these and returns no page
    - to_response() is the whole REST error body; it never includes debug_info

Design Decisions:
    - Status codes decided here once, read by api/error_handlers.py; the core
      raises by meaning and never mentions HTTP
    - ErrorContext is a dataclass so log extras and the response share one source
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    UNSUPPORTED = "unsupported"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Who hit the error and on which input field."""
    timestamp: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
    viewer_id: str | None = None
    field: str | None = None
    debug_info: dict[str, Any] | None = None


class FeedlineError(Exception):
    """Base exception. Subclasses override the class attributes."""

    code = "INTERNAL_ERROR"
    category = ErrorCategory.INTERNAL
    severity = ErrorSeverity.ERROR
    http_status = 500

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()

    @property
    def is_client_error(self) -> bool:
        return self.http_status < 500

    def to_response(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "viewer_id": self.context.viewer_id,
                    "field": self.context.field,
                },
            }
        }


# ─── Caller errors (4xx) ─────────────────────────────────────────

class ValidationError(FeedlineError):
    """Malformed or contradictory input: pagination values, bodies, names."""
    code = "VALIDATION_ERROR"
    category = ErrorCategory.VALIDATION
    severity = ErrorSeverity.WARNING
    http_status = 400

    def __init__(
        self, message: str, field: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(message, context)
        self.context.field = field
        self.field = field


class UnauthorizedError(FeedlineError):
    """No viewer identity, or one that failed verification."""
    code = "UNAUTHORIZED"
    category = ErrorCategory.AUTHENTICATION
    severity = ErrorSeverity.WARNING
    http_status = 401

    def __init__(
        self, message: str = "authentication required",
        context: ErrorContext | None = None,
    ):
        super().__init__(message, context)


class ResourceNotFoundError(FeedlineError):
    code = "RESOURCE_NOT_FOUND"
    category = ErrorCategory.RESOURCE_NOT_FOUND
    severity = ErrorSeverity.WARNING
    http_status = 404

    def __init__(
        self, resource_type: str, resource_id: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(f"{resource_type} {resource_id} not found", context)
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictError(FeedlineError):
    """Uniqueness violation, e.g. a taken user name."""
    code = "CONFLICT"
    category = ErrorCategory.CONFLICT
    severity = ErrorSeverity.WARNING
    http_status = 409


class UnsupportedError(FeedlineError):
    """A mode the API accepts syntactically but does not serve."""
    code = "UNSUPPORTED"
    category = ErrorCategory.UNSUPPORTED
    http_status = 501

    def __init__(self, feature: str, context: ErrorContext | None = None):
        super().__init__(f"{feature} is not supported", context)
        self.feature = feature


# ─── Service errors (5xx) ────────────────────────────────────────

class InternalError(FeedlineError):
    """Storage failure or a broken upstream invariant."""
    severity = ErrorSeverity.CRITICAL


class ReferentialIntegrityError(InternalError):
    """A message points at an author record that does not exist."""
    code = "REFERENTIAL_INTEGRITY"

    def __init__(
        self, missing_author_ids: list[str], context: ErrorContext | None = None,
    ):
        super().__init__(
            f"author record missing for {len(missing_author_ids)} message author(s)",
            context,
        )
        self.missing_author_ids = missing_author_ids


class DatabaseError(InternalError):
    """The database could not serve the request; retryable by the client."""
    code = "DATABASE_ERROR"
    category = ErrorCategory.DATABASE
    http_status = 503

    def __init__(
        self, message: str, operation: str, context: ErrorContext | None = None,
    ):
        super().__init__(f"database {operation} failed: {message}", context)
        self.operation = operation
