"""Transaction Schemas — transfer input and ledger read forms.

Invariants:
    - receiver accepts an int id or an email string
    - amount is not parsed or range-checked here: the ledger owns it, so a
      missing or malformed amount is reported only after the sender and
      receiver checks, exactly as for a direct service call

Design Decisions:
    - int | str union in smart mode: JSON numbers stay ints, JSON strings stay
      strings, so "42" is treated as an email-like identifier, not an id
"""

from decimal import Decimal

from pydantic import BaseModel


class TransactionCreate(BaseModel):
    sender_id: int
    receiver: int | str
    description: str | None = None
    amount: Decimal | str | None = None
    fee_percent: Decimal | None = None


class TransactionResponse(BaseModel):
    """Stored transaction as returned by create."""
    id: int
    sender_id: int
    receiver_id: int
    description: str | None
    amount: Decimal
    fee_percent: Decimal

    model_config = {"from_attributes": True}


class TransactionView(BaseModel):
    """Ledger row enriched with the receiver email."""
    id: int
    sender_id: int
    receiver_id: int
    receiver_email: str
    description: str | None
    amount: Decimal
    fee_percent: Decimal
