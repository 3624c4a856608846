"""Transfer Enforcement — tests for pure amount, fee and description rules.

Tests cover:
    - validate_amount accepts positive decimals and rounds to cents
    - validate_amount rejects zero, negatives, garbage, and sub-cent amounts
    - validate_amount rejects values the NUMERIC(10,2) column cannot hold
    - resolve_fee_percent defaults to 0.5 and stays within [0, 1000)
    - truncate_description cuts to exactly 255 characters
"""

from decimal import Decimal

import pytest

from paybuddy.core.domain_types import (
    AMOUNT_LIMIT, DEFAULT_FEE_PERCENT, DESCRIPTION_MAX_LENGTH,
)
from paybuddy.core.enforce_transfer import (
    resolve_fee_percent, truncate_description, validate_amount,
)
from paybuddy.core.errors import ValidationError


# ─── validate_amount ─────────────────────────────────────────────

def test_validate_amount_keeps_two_decimal_places():
    assert validate_amount(Decimal("12.50")) == Decimal("12.50")
    assert str(validate_amount(Decimal("12.5"))) == "12.50"


def test_validate_amount_accepts_int_and_str():
    assert validate_amount(3) == Decimal("3.00")
    assert validate_amount("7.25") == Decimal("7.25")


def test_validate_amount_converts_float_without_binary_noise():
    assert validate_amount(0.1) == Decimal("0.10")


def test_validate_amount_rounds_half_up():
    assert validate_amount(Decimal("1.005")) == Decimal("1.01")


@pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-0.01"), -5, "0.00"])
def test_validate_amount_rejects_non_positive(amount):
    with pytest.raises(ValidationError) as exc_info:
        validate_amount(amount)
    assert exc_info.value.field == "amount"
    assert exc_info.value.http_status == 400


def test_validate_amount_rejects_amount_that_rounds_to_zero():
    with pytest.raises(ValidationError):
        validate_amount(Decimal("0.004"))


@pytest.mark.parametrize("amount", [None, "abc", True, "NaN", "Infinity"])
def test_validate_amount_rejects_non_decimal(amount):
    with pytest.raises(ValidationError) as exc_info:
        validate_amount(amount)
    assert exc_info.value.field == "amount"


def test_validate_amount_accepts_largest_storable_value():
    assert validate_amount(Decimal("99999999.99")) == Decimal("99999999.99")


@pytest.mark.parametrize("amount", [
    AMOUNT_LIMIT, Decimal("123456789012.34"), Decimal("99999999.995"), "1e30",
])
def test_validate_amount_rejects_values_too_large_for_column(amount):
    with pytest.raises(ValidationError) as exc_info:
        validate_amount(amount)
    assert exc_info.value.field == "amount"
    assert exc_info.value.http_status == 400


# ─── resolve_fee_percent ─────────────────────────────────────────

def test_fee_defaults_to_half_percent_when_absent():
    assert resolve_fee_percent(None) == Decimal("0.5")
    assert resolve_fee_percent(None) == DEFAULT_FEE_PERCENT


def test_explicit_fee_is_kept():
    assert resolve_fee_percent(Decimal("1.25")) == Decimal("1.25")
    assert resolve_fee_percent(0) == Decimal("0.00")


def test_fee_upper_edge_is_kept():
    assert resolve_fee_percent("999.99") == Decimal("999.99")


@pytest.mark.parametrize("fee", [Decimal("-7"), Decimal("-0.01"), Decimal("1000"), "1e40"])
def test_fee_out_of_column_range_rejected(fee):
    with pytest.raises(ValidationError) as exc_info:
        resolve_fee_percent(fee)
    assert exc_info.value.field == "fee_percent"


# ─── truncate_description ────────────────────────────────────────

def test_long_description_truncated_to_exact_limit():
    text = "x" * 200 + "y" * 100
    result = truncate_description(text)
    assert len(result) == DESCRIPTION_MAX_LENGTH == 255
    assert result == text[:255]


def test_short_description_unchanged():
    assert truncate_description("lunch") == "lunch"


def test_description_at_limit_unchanged():
    text = "a" * 255
    assert truncate_description(text) == text


def test_none_description_passes_through():
    assert truncate_description(None) is None