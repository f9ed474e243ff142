"""ORM Models — SQLAlchemy declarative models for users, credentials, messages and follows.

Invariants:
    - All models inherit from Base (db/base.py)
    - Every model imported here so Base.metadata is complete for create_all/alembic

Design Decisions:
    - One file per entity for locality
"""

from feedline.models.user import User  # noqa: F401
from feedline.models.user_auth import UserAuth  # noqa: F401
from feedline.models.message import Message  # noqa: F401
from feedline.models.follow import Follow  # noqa: F401
