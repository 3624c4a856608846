"""Connection Rule Enforcement — edge rules that need no lookup.

Invariants:
    - PURE: no IO, no async, no DB
    - Self-connection rejected before any existence check runs
"""

from paybuddy.core.errors import ValidationError


def check_not_self(user_id: int, connection_id: int) -> None:
    """A user cannot add themselves as a counterparty."""
    if user_id == connection_id:
        raise ValidationError(
            f"User {user_id} cannot connect to themselves", "connection_id",
        )
