"""Projections — tests for display-safe user, transaction and connection views.

Tests cover:
    - to_public_view never carries the password
    - mask_email keeps first character and domain, fixed-width mask
    - Short, empty and malformed emails
    - Transaction and connection views carry read-time enrichment
"""

from dataclasses import dataclass
from decimal import Decimal

from paybuddy.core.projections import (
    mask_email, to_connection_view, to_masked_view, to_public_view,
    to_transaction_view,
)


@dataclass
class _User:
    id: int
    username: str
    email: str
    password: str = "$2b$04$hashhashhash"


@dataclass
class _Txn:
    id: int
    sender_id: int
    receiver_id: int
    description: str | None
    amount: Decimal
    fee_percent: Decimal


@dataclass
class _Edge:
    user_id: int
    connection_id: int


# ─── to_public_view ──────────────────────────────────────────────

def test_public_view_has_no_password():
    view = to_public_view(_User(1, "jane", "jane@mail.com"))
    assert view == {"id": 1, "username": "jane", "email": "jane@mail.com"}
    assert "password" not in view


# ─── mask_email ──────────────────────────────────────────────────

def test_mask_single_char_local_part():
    assert mask_email("j@domain.com") == "*@domain.com"


def test_mask_regular_local_part():
    assert mask_email("jane@domain.com") == "j****@domain.com"


def test_mask_width_does_not_reveal_length():
    assert mask_email("jo@domain.com") == "j****@domain.com"
    assert mask_email("jonathan@domain.com") == "j****@domain.com"


def test_mask_empty_local_part():
    assert mask_email("@domain.com") == "*@domain.com"


def test_mask_passes_malformed_input_through():
    assert mask_email("not-an-email") == "not-an-email"
    assert mask_email("") == ""


def test_masked_view_shape():
    view = to_masked_view(_User(2, "jane", "jane@domain.com"))
    assert view == {"id": 2, "username": "jane", "masked_email": "j****@domain.com"}
    assert "email" not in view
    assert "password" not in view


# ─── to_transaction_view / to_connection_view ────────────────────

def test_transaction_view_includes_receiver_email():
    txn = _Txn(5, 1, 2, "lunch", Decimal("12.50"), Decimal("0.50"))
    view = to_transaction_view(txn, "b@x.com")
    assert view["receiver_email"] == "b@x.com"
    assert view["receiver_id"] == 2
    assert view["amount"] == Decimal("12.50")
    assert view["fee_percent"] == Decimal("0.5")


def test_connection_view_fields():
    view = to_connection_view(_Edge(1, 2), "alice", "b@x.com", "bob")
    assert view == {
        "user_id": 1,
        "connection_id": 2,
        "my_username": "alice",
        "friend_email": "b@x.com",
        "friend_username": "bob",
    }
