"""Service test fixtures — async DB, wired services + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB sessions
    - db_manager patched so the readiness probe hits the test engine
    - bcrypt runs at cost factor 4
    - StaticPool: every session shares the one in-memory connection

Design Decisions:
    - SQLite in-memory: fast, no external dependency; unique, primary-key and
      CHECK constraints are all enforced, which is what the race tests need
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from paybuddy.db.base import Base
import paybuddy.models  # noqa: F401
from paybuddy.infrastructure.database import get_db, DatabaseSessionManager
from paybuddy.infrastructure.password_hasher import BcryptHasher
from paybuddy.services.connection_graph import ConnectionGraph
from paybuddy.services.credential_store import CredentialStore
from paybuddy.services.transfer_ledger import TransferLedger
import paybuddy.infrastructure.database as db_module
from paybuddy.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def hasher():
    return BcryptHasher(rounds=4)


@pytest.fixture
def users(test_db, hasher):
    return CredentialStore(test_db, hasher)


@pytest.fixture
def graph(test_db, users):
    return ConnectionGraph(test_db, users)


@pytest.fixture
def ledger(test_db, users):
    return TransferLedger(test_db, users)


@pytest.fixture
async def alice(users):
    """User id=1, email a@x.com."""
    return await users.register("alice", "a@x.com", "alice-pw")


@pytest.fixture
async def bob(users, alice):
    """User id=2, email b@x.com (registered after alice)."""
    return await users.register("bob", "b@x.com", "bob-pw")


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
