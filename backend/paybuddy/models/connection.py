"""Connection ORM — directed "may-pay" edge between two users.

Invariants:
    - Composite primary key (user_id, connection_id): at most one edge per ordered pair
    - user_id != connection_id (CHECK constraint)
    - Edges are not mirrored: (1, 2) says nothing about (2, 1)

Design Decisions:
    - No ondelete policy on the foreign keys: there is no delete-user operation,
      so cascade behavior is left undefined rather than guessed
"""

from sqlalchemy import CheckConstraint, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from paybuddy.db.base import Base


class Connection(Base):
    """user_id has added connection_id as a payable counterparty."""
    __tablename__ = "connections"
    __table_args__ = (
        CheckConstraint("user_id <> connection_id", name="ck_connections_not_self"),
    )

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), primary_key=True,
    )
    connection_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), primary_key=True,
    )

    def __repr__(self) -> str:
        return f"Connection(user_id={self.user_id!r}, connection_id={self.connection_id!r})"
