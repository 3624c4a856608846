"""Route Dependencies — service construction and HTTP Basic authentication.

Invariants:
    - One AsyncSession per request, shared by every service the route uses
    - Authentication failure is always 401 with the same message, whether the
      email is unknown or the password is wrong

Design Decisions:
    - HTTP Basic (email + password) on every protected route; no token
      issuance exists in this system
"""

import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from paybuddy.core.repository_protocols import CredentialHasher
from paybuddy.infrastructure.database import get_db
from paybuddy.infrastructure.password_hasher import get_hasher
from paybuddy.models.user import User
from paybuddy.services.connection_graph import ConnectionGraph
from paybuddy.services.credential_store import CredentialStore
from paybuddy.services.transfer_ledger import TransferLedger

logger = logging.getLogger(__name__)
basic_auth = HTTPBasic()

INVALID_CREDENTIALS = "Invalid email or password"


def get_credential_store(
    db: AsyncSession = Depends(get_db),
    hasher: CredentialHasher = Depends(get_hasher),
) -> CredentialStore:
    return CredentialStore(db, hasher)


def get_connection_graph(
    db: AsyncSession = Depends(get_db),
    users: CredentialStore = Depends(get_credential_store),
) -> ConnectionGraph:
    return ConnectionGraph(db, users)


def get_transfer_ledger(
    db: AsyncSession = Depends(get_db),
    users: CredentialStore = Depends(get_credential_store),
) -> TransferLedger:
    return TransferLedger(db, users)


def unauthorized() -> HTTPException:
    return HTTPException(
        status.HTTP_401_UNAUTHORIZED,
        detail=INVALID_CREDENTIALS,
        headers={"WWW-Authenticate": "Basic"},
    )


async def get_current_user(
    credentials: HTTPBasicCredentials = Depends(basic_auth),
    users: CredentialStore = Depends(get_credential_store),
) -> User:
    """Resolve the acting user from HTTP Basic credentials."""
    user = await users.authenticate(credentials.username, credentials.password)
    if user is None:
        logger.warning("Authentication failed")
        raise unauthorized()
    return user
