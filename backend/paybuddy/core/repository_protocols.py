"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Password hashing accessed only through CredentialHasher
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Hasher is sync: bcrypt is CPU-bound, there is no IO to await
"""

from decimal import Decimal
from typing import Protocol


class UserLike(Protocol):
    """Structural contract for User rows passed to projections.

    Keeps core/projections.py independent of the ORM model.
    """
    id: int
    username: str
    email: str
    password: str


class TransactionLike(Protocol):
    """Structural contract for Transaction rows passed to projections."""
    id: int
    sender_id: int
    receiver_id: int
    description: str | None
    amount: Decimal
    fee_percent: Decimal


class ConnectionLike(Protocol):
    """Structural contract for Connection rows passed to projections."""
    user_id: int
    connection_id: int


class CredentialHasher(Protocol):
    """Contract for one-way password hashing — implemented by shell."""
    def hash(self, plaintext: str) -> str: ...
    def verify(self, plaintext: str, hashed: str) -> bool: ...
