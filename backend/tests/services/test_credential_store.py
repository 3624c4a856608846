"""Credential Store — registration, verification and password change against SQLite.

Tests cover:
    - register hashes the password and rejects duplicate emails
    - email uniqueness is case-sensitive
    - a registration that loses the race hits the DB constraint → AlreadyExistsError
    - verify_credentials is False for unknown users and wrong passwords
    - change_password error paths and exactly-one-hash side effect
    - authenticate returns the user from a single lookup
    - hashing runs off the event loop: other tasks keep running meanwhile
"""

import asyncio
import time
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import func, select

from paybuddy.core.errors import AlreadyExistsError, ValidationError
from paybuddy.core.projections import to_public_view
from paybuddy.models.user import User
from paybuddy.services.credential_store import CredentialStore


async def _count_email(db, email: str) -> int:
    result = await db.execute(
        select(func.count()).select_from(User).where(User.email == email),
    )
    return result.scalar_one()


async def test_register_stores_hash_not_plaintext(users):
    user = await users.register("jane", "jane@mail.com", "p1")
    assert "password" not in to_public_view(user)

    stored = await users.find_by_email("jane@mail.com")
    assert stored is not None
    assert stored.password != "p1"
    assert stored.password.startswith("$2")


async def test_register_assigns_ids(alice, bob):
    assert alice.id == 1
    assert bob.id == 2


async def test_register_duplicate_email_rejected(users, alice, test_db):
    with pytest.raises(AlreadyExistsError) as exc_info:
        await users.register("alice2", "a@x.com", "other")
    assert exc_info.value.resource_type == "user"
    assert await _count_email(test_db, "a@x.com") == 1


async def test_email_uniqueness_is_case_sensitive(users, alice):
    other = await users.register("alice-upper", "A@x.com", "pw")
    assert other.id != alice.id


async def test_register_race_hits_unique_constraint(test_session_factory, hasher):
    async with test_session_factory() as first_db:
        first = CredentialStore(first_db, hasher)
        await first.register("first", "race@x.com", "pw")

    async with test_session_factory() as second_db:
        second = CredentialStore(second_db, hasher)
        second.find_by_email = AsyncMock(return_value=None)
        with pytest.raises(AlreadyExistsError):
            await second.register("second", "race@x.com", "pw")

    async with test_session_factory() as check_db:
        assert await _count_email(check_db, "race@x.com") == 1


async def test_register_hashes_exactly_once(test_db):
    hasher = MagicMock()
    hasher.hash.return_value = "hashed"
    store = CredentialStore(test_db, hasher)
    await store.register("u", "u@x.com", "pw")
    hasher.hash.assert_called_once_with("pw")


async def test_find_by_id_and_missing(users, alice):
    assert (await users.find_by_id(alice.id)).email == "a@x.com"
    assert await users.find_by_id(999) is None
    assert await users.find_by_email("nobody@x.com") is None


async def test_list_users(users, alice, bob):
    listed = await users.list_users()
    assert [u.email for u in listed] == ["a@x.com", "b@x.com"]


async def test_verify_credentials(users, alice):
    assert await users.verify_credentials("a@x.com", "alice-pw") is True
    assert await users.verify_credentials("a@x.com", "wrong") is False
    assert await users.verify_credentials("nobody@x.com", "alice-pw") is False


async def test_change_password_success(users, alice):
    await users.change_password("a@x.com", "alice-pw", "new-pw", "new-pw")
    assert await users.verify_credentials("a@x.com", "new-pw") is True
    assert await users.verify_credentials("a@x.com", "alice-pw") is False


async def test_change_password_unknown_user(users):
    with pytest.raises(ValidationError) as exc_info:
        await users.change_password("nobody@x.com", "x", "y", "y")
    assert exc_info.value.field == "email"


async def test_change_password_wrong_current(users, alice):
    with pytest.raises(ValidationError) as exc_info:
        await users.change_password("a@x.com", "wrong", "new", "new")
    assert exc_info.value.field == "current_password"
    assert await users.verify_credentials("a@x.com", "alice-pw") is True


async def test_change_password_confirmation_mismatch(users, alice):
    with pytest.raises(ValidationError) as exc_info:
        await users.change_password("a@x.com", "alice-pw", "new", "other")
    assert exc_info.value.field == "confirm_password"
    assert await users.verify_credentials("a@x.com", "alice-pw") is True


async def test_change_password_hashes_exactly_once(test_db, hasher):
    store = CredentialStore(test_db, hasher)
    await store.register("u", "u@x.com", "old")

    spy = MagicMock(wraps=hasher)
    store.hasher = spy
    await store.change_password("u@x.com", "old", "new", "new")
    spy.hash.assert_called_once_with("new")


async def test_authenticate_returns_user_with_one_lookup(users, alice):
    lookups = []
    find_by_email = users.find_by_email

    async def counting_find_by_email(email):
        lookups.append(email)
        return await find_by_email(email)

    users.find_by_email = counting_find_by_email

    user = await users.authenticate("a@x.com", "alice-pw")
    assert user is not None
    assert user.id == alice.id
    assert lookups == ["a@x.com"]

    assert await users.authenticate("a@x.com", "wrong") is None
    assert await users.authenticate("nobody@x.com", "alice-pw") is None


class _SlowHasher:
    """Blocks its thread for as long as a high-cost bcrypt round would."""

    def hash(self, plaintext: str) -> str:
        time.sleep(0.3)
        return f"slow${plaintext}"

    def verify(self, plaintext: str, hashed: str) -> bool:
        time.sleep(0.3)
        return hashed == f"slow${plaintext}"


async def test_hashing_leaves_event_loop_free(test_db):
    store = CredentialStore(test_db, _SlowHasher())
    ticks = 0

    async def heartbeat():
        nonlocal ticks
        while True:
            await asyncio.sleep(0.01)
            ticks += 1

    beat = asyncio.create_task(heartbeat())
    try:
        await store.register("slow", "slow@x.com", "pw")
        assert await store.verify_credentials("slow@x.com", "pw") is True
    finally:
        beat.cancel()

    # 0.6s of hashing at one tick per 10ms; a blocked loop manages almost none
    assert ticks >= 20
