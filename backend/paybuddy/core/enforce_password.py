"""Password Rule Enforcement — checks that run before any hashing.

Invariants:
    - PURE: no IO, no async, no DB
    - Never echoes a password in an error message
"""

from paybuddy.core.errors import ValidationError


def check_password_confirmation(new_password: str, confirm_password: str) -> None:
    if new_password != confirm_password:
        raise ValidationError(
            "New password and confirmation do not match", "confirm_password",
        )
