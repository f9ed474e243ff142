"""SQLAlchemy Declarative Base — shared base class for all ORM models.

Invariants:
    - All models inherit from Base
    - Base is the single source of truth for table metadata
    - Primary keys are UUIDv7, so id order follows creation order
"""

import uuid

from sqlalchemy.orm import DeclarativeBase
from uuid6 import uuid7


class Base(DeclarativeBase):
    """Base class for all Feedline ORM models."""
    pass


def time_ordered_uuid() -> uuid.UUID:
    """UUIDv7 as a plain uuid.UUID, used as the primary key default."""
    return uuid.UUID(int=uuid7().int)
