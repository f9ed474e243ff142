"""Structured Logging — JSON log records for request and timeline observability.

Invariants:
    - Every record carries timestamp (record creation time, UTC), level, logger,
      service and message
    - Timeline extras (viewer_id, offset, limit, item_count) and error extras
      (error_code, path) are copied onto the record only when set
    - setup_logging() is idempotent: calling it again replaces the handler it
      installed instead of stacking a second one

Design Decisions:
    - stdlib logging + a small JSONFormatter, no logging dependency
    - SQLAlchemy engine logging pinned to WARNING unless the root level is DEBUG
"""

import json
import logging
from datetime import datetime, timezone

SERVICE_NAME = "feedline-api"

EXTRA_FIELDS = (
    "viewer_id", "offset", "limit", "item_count", "error_code", "path",
)

_HANDLER_NAME = "feedline"


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": SERVICE_NAME,
            "message": record.getMessage(),
        }
        entry.update(_extras(record))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        # UUIDs and datetimes in extras fall back to str()
        return json.dumps(entry, ensure_ascii=False, default=str)


def _extras(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in EXTRA_FIELDS
        if record.__dict__.get(key) is not None
    }


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the feedline handler on the root logger and return it."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    root.addHandler(handler)

    root_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(root_level)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if root_level <= logging.DEBUG else logging.WARNING,
    )
    return handler
