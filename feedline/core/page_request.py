"""PageRequest Normalizer — raw pagination inputs to a canonical, bounded request.

Invariants:
    - limit in [1, 100], default 20
    - offset >= 0, default 0
    - Bounds hold for every PageRequest, including hand-built ones
      (checked in __post_init__)
    - absolute_cursor and an explicit offset are mutually exclusive
    - Mutual exclusion is checked before any other field, so a request carrying
      both is rejected regardless of what else it contains
    - Pure: same inputs, same PageRequest or same ValidationError

Design Decisions:
    - Raw values accepted as int | str | None: query strings reach this module
      untouched so the HTTP layer does not duplicate the bounds
    - Empty string treated as absent (``?max_id=`` is not a cursor)
    - bool rejected even though it is an int subclass
"""

from dataclasses import dataclass
from uuid import UUID

from feedline.core.domain_types import (
    DEFAULT_PAGE_LIMIT, DEFAULT_PAGE_OFFSET, MAX_PAGE_LIMIT, MIN_PAGE_LIMIT,
    MessageId, PaginationMode,
)
from feedline.core.errors import ValidationError

RawValue = int | str | None


@dataclass(frozen=True)
class PageRequest:
    """Canonical pagination query. Build via normalize_page_request()."""
    limit: int = DEFAULT_PAGE_LIMIT
    offset: int = DEFAULT_PAGE_OFFSET
    absolute_cursor: MessageId | None = None

    def __post_init__(self):
        if isinstance(self.limit, bool) or not (
            isinstance(self.limit, int)
            and MIN_PAGE_LIMIT <= self.limit <= MAX_PAGE_LIMIT
        ):
            raise ValidationError("limit out of range", field="limit")
        if isinstance(self.offset, bool) or not (
            isinstance(self.offset, int) and self.offset >= 0
        ):
            raise ValidationError("offset out of range", field="offset")

    @property
    def mode(self) -> PaginationMode:
        if self.absolute_cursor is not None:
            return PaginationMode.ABSOLUTE_CURSOR
        return PaginationMode.OFFSET

    @property
    def has_conflicting_modes(self) -> bool:
        return (
            self.absolute_cursor is not None
            and self.offset != DEFAULT_PAGE_OFFSET
        )

    @property
    def fetch_size(self) -> int:
        """Rows to read: one more than the page to detect a following page."""
        return self.limit + 1


def normalize_page_request(
    limit: RawValue = None,
    offset: RawValue = None,
    max_id: RawValue = None,
) -> PageRequest:
    """Validate raw limit/offset/max_id into a PageRequest. Pure, no IO."""
    cursor_given = not _is_absent(max_id)
    offset_given = not _is_absent(offset)

    if cursor_given and offset_given:
        raise ValidationError(
            "mutually exclusive pagination modes", field="max_id",
        )

    parsed_limit = _parse_bounded_int(
        limit, "limit", DEFAULT_PAGE_LIMIT, MIN_PAGE_LIMIT, MAX_PAGE_LIMIT,
    )
    parsed_offset = _parse_bounded_int(
        offset, "offset", DEFAULT_PAGE_OFFSET, 0, None,
    )
    cursor = _parse_cursor(max_id) if cursor_given else None

    return PageRequest(
        limit=parsed_limit, offset=parsed_offset, absolute_cursor=cursor,
    )


# --- Parsing helpers ----------------------------------------------------------


def _is_absent(raw: RawValue) -> bool:
    return raw is None or (isinstance(raw, str) and raw.strip() == "")


def _parse_bounded_int(
    raw: RawValue, name: str, default: int, lower: int, upper: int | None,
) -> int:
    if _is_absent(raw):
        return default
    if isinstance(raw, bool):
        raise ValidationError(f"{name} out of range", field=name)
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} out of range", field=name)
    if value < lower or (upper is not None and value > upper):
        raise ValidationError(f"{name} out of range", field=name)
    return value


def _parse_cursor(raw: RawValue) -> MessageId:
    if not isinstance(raw, str):
        raise ValidationError("invalid cursor", field="max_id")
    try:
        return MessageId(UUID(raw.strip()))
    except ValueError:
        raise ValidationError("invalid cursor", field="max_id")
