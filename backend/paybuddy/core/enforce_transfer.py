"""Transfer Rule Enforcement — amount, description and fee rules for new transactions.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Amounts are Decimal, rounded half-up to cents, and strictly > 0 after rounding
    - Descriptions are truncated to DESCRIPTION_MAX_LENGTH, never rejected for length
    - A missing fee falls back to DEFAULT_FEE_PERCENT
    - Amount stays below AMOUNT_LIMIT and fee within [0, FEE_PERCENT_LIMIT), so a
      value the columns cannot hold is a ValidationError, never a failed commit

Design Decisions:
    - Floats are converted through str(): Decimal(0.1) would carry binary noise
      into a fixed-point column
    - Positivity checked on the rounded value so 0.001 can never persist as 0.00
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from paybuddy.core.domain_types import (
    AMOUNT_LIMIT, CENTS, DEFAULT_FEE_PERCENT, DESCRIPTION_MAX_LENGTH,
    FEE_PERCENT_LIMIT,
)
from paybuddy.core.errors import ValidationError


def _to_decimal(value: object, field: str) -> Decimal:
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field} is required and must be a decimal", field)
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be a decimal, got {value!r}", field)
    if not number.is_finite():
        raise ValidationError(f"{field} must be a finite decimal", field)
    return number


def _to_cents(value: object, field: str) -> Decimal:
    try:
        return _to_decimal(value, field).quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValidationError(f"{field} has too many digits", field)


def validate_amount(amount: object) -> Decimal:
    """Return the amount rounded to cents, or raise if it is not positive or too large."""
    number = _to_cents(amount, "amount")
    if number <= 0:
        raise ValidationError("amount must be strictly greater than 0", "amount")
    if number >= AMOUNT_LIMIT:
        raise ValidationError(f"amount must be below {AMOUNT_LIMIT}", "amount")
    return number


def resolve_fee_percent(fee_percent: object | None) -> Decimal:
    """Default to 0.5 when absent; otherwise keep two decimal places within range."""
    if fee_percent is None:
        return DEFAULT_FEE_PERCENT
    number = _to_cents(fee_percent, "fee_percent")
    if number < 0 or number >= FEE_PERCENT_LIMIT:
        raise ValidationError(
            f"fee_percent must be between 0 and {FEE_PERCENT_LIMIT}", "fee_percent",
        )
    return number


def truncate_description(description: str | None) -> str | None:
    """Cut free text to its first DESCRIPTION_MAX_LENGTH characters."""
    if description is None:
        return None
    return description[:DESCRIPTION_MAX_LENGTH]
