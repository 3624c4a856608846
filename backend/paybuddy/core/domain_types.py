"""Domain Types — identity types, receiver addressing, and ledger constants.

Invariants:
    - UserId, TransactionId wrap ints — never use bare int for identity in domain logic
    - ReceiverRef is exactly one of ById | ByEmail
    - DEFAULT_FEE_PERCENT is 0.5 (meaning 0.5%), metadata only

Design Decisions:
    - NewType over dataclass wrappers for ids: zero runtime cost, full type-checker support
    - Frozen dataclasses for ReceiverRef: the ledger and the connection graph
      pattern-match on the variant instead of branching on which of two
      nullable fields is set
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import NewType, Union


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
TransactionId = NewType("TransactionId", int)


# ─── Ledger Constants ────────────────────────────────────────────

DEFAULT_FEE_PERCENT = Decimal("0.50")
DESCRIPTION_MAX_LENGTH = 255
CENTS = Decimal("0.01")
UNKNOWN_EMAIL = "unknown"
# Exclusive upper bounds of the NUMERIC(10,2) amount and NUMERIC(5,2) fee columns
AMOUNT_LIMIT = Decimal("100000000")
FEE_PERCENT_LIMIT = Decimal("1000")


# ─── Receiver Addressing ─────────────────────────────────────────

@dataclass(frozen=True)
class ById:
    """User addressed by id."""
    user_id: int


@dataclass(frozen=True)
class ByEmail:
    """User addressed by login email (case-sensitive)."""
    email: str


ReceiverRef = Union[ById, ByEmail]


def receiver_ref(value: int | str) -> ReceiverRef:
    """Build a ReceiverRef from whichever identifier the caller holds."""
    if isinstance(value, bool):
        raise TypeError("receiver must be an int id or an email string")
    if isinstance(value, int):
        return ById(value)
    if isinstance(value, str):
        return ByEmail(value)
    raise TypeError("receiver must be an int id or an email string")
