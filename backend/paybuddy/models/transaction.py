"""Transaction ORM — one immutable money movement in the ledger.

Invariants:
    - amount is Numeric(10, 2) and strictly > 0 (CHECK constraint)
    - fee_percent is Numeric(5, 2), defaults to 0.5, never applied to any balance
    - description holds at most 255 characters
    - Equality and hashing use id only

Design Decisions:
    - receiver email is NOT stored: it is joined in at read time, so there is
      nothing to invalidate when a user changes
"""

from decimal import Decimal

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from paybuddy.core.domain_types import DEFAULT_FEE_PERCENT, DESCRIPTION_MAX_LENGTH
from paybuddy.db.base import Base


class Transaction(Base):
    """Ledger row: sender_id paid receiver_id."""
    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sender_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True,
    )
    receiver_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True,
    )
    description: Mapped[str | None] = mapped_column(
        String(DESCRIPTION_MAX_LENGTH), nullable=True,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    fee_percent: Mapped[Decimal] = mapped_column(
        Numeric(5, 2), nullable=False, default=DEFAULT_FEE_PERCENT,
    )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transaction):
            return NotImplemented
        return self.id is not None and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id) if self.id is not None else id(self)

    def __repr__(self) -> str:
        return (
            f"Transaction(id={self.id!r}, sender_id={self.sender_id!r}, "
            f"receiver_id={self.receiver_id!r}, amount={self.amount!r}, "
            f"fee_percent={self.fee_percent!r})"
        )
