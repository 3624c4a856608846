"""User ORM — identity record owned by the credential store.

Invariants:
    - email is unique across all users (DB constraint, case-sensitive as stored)
    - password column only ever holds a bcrypt hash
    - Rows are never deleted by the application

Design Decisions:
    - Integer surrogate key: connections and transactions reference it directly
    - No ORM relationships to connections/transactions: enrichment is done by
      explicit joins at read time
"""

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from paybuddy.db.base import Base


class User(Base):
    """Registered user."""
    __tablename__ = "users"
    __table_args__ = (UniqueConstraint("email", name="uq_users_email"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, username={self.username!r}, email={self.email!r})"
