"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - users is referenced by connections and transactions, never mutated by them

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all
      or alembic autogenerate runs
"""

from paybuddy.models.user import User  # noqa: F401
from paybuddy.models.connection import Connection  # noqa: F401
from paybuddy.models.transaction import Transaction  # noqa: F401
