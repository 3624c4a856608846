"""Read Projections — display-safe shapes for users, connections and transactions.

Invariants:
    - All functions are PURE: callers pass in everything read from the DB
    - No projection ever contains the password hash
    - mask_email keeps the first local-part character and the domain only
    - Input without "@" passes through mask_email unchanged

Design Decisions:
    - Fixed-width mask (MASK_WIDTH) instead of one mask char per hidden char:
      the masked form does not reveal the local-part length
    - Plain dicts out: FastAPI response models validate them at the boundary
"""

from paybuddy.core.repository_protocols import (
    ConnectionLike, TransactionLike, UserLike,
)

MASK_CHAR = "*"
MASK_WIDTH = 4


def mask_email(email: str) -> str:
    """"jane@domain.com" -> "j****@domain.com"; "j@domain.com" -> "*@domain.com"."""
    local, sep, domain = email.rpartition("@")
    if not sep:
        return email
    if len(local) <= 1:
        return f"{MASK_CHAR}@{domain}"
    return f"{local[0]}{MASK_CHAR * MASK_WIDTH}@{domain}"


def to_public_view(user: UserLike) -> dict:
    return {"id": user.id, "username": user.username, "email": user.email}


def to_masked_view(user: UserLike) -> dict:
    return {
        "id": user.id,
        "username": user.username,
        "masked_email": mask_email(user.email),
    }


def to_transaction_view(txn: TransactionLike, receiver_email: str) -> dict:
    """Transaction row plus the receiver email resolved at read time."""
    return {
        "id": txn.id,
        "sender_id": txn.sender_id,
        "receiver_id": txn.receiver_id,
        "receiver_email": receiver_email,
        "description": txn.description,
        "amount": txn.amount,
        "fee_percent": txn.fee_percent,
    }


def to_connection_view(
    edge: ConnectionLike,
    my_username: str,
    friend_email: str,
    friend_username: str,
) -> dict:
    return {
        "user_id": edge.user_id,
        "connection_id": edge.connection_id,
        "my_username": my_username,
        "friend_email": friend_email,
        "friend_username": friend_username,
    }
