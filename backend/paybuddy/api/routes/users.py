"""User Routes — registration, login check, directory and profile.

Invariants:
    - Responses are built from core projections: no password hash ever leaves
    - /auth/login answers 401 with one constant message for every failure
    - Only /users/register and /auth/login are reachable without credentials
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status

from paybuddy.api.dependencies import (
    get_credential_store, get_current_user, unauthorized,
)
from paybuddy.core.projections import to_masked_view, to_public_view
from paybuddy.models.user import User
from paybuddy.schemas.user import (
    PasswordChange, UserLogin, UserMasked, UserPublic, UserRegister,
)
from paybuddy.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["users"])


@router.post(
    "/users/register", response_model=UserPublic,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: UserRegister,
    users: CredentialStore = Depends(get_credential_store),
):
    """Open registration."""
    user = await users.register(body.username, body.email, body.password)
    return to_public_view(user)


@router.post("/auth/login", response_model=UserPublic)
async def login(
    body: UserLogin,
    users: CredentialStore = Depends(get_credential_store),
):
    """Check credentials and return the caller's public profile."""
    user = await users.authenticate(body.email, body.password)
    if user is None:
        raise unauthorized()
    return to_public_view(user)


@router.get("/users", response_model=list[UserPublic | UserMasked])
async def list_users(
    masked: bool = Query(False),
    users: CredentialStore = Depends(get_credential_store),
    _: User = Depends(get_current_user),
):
    """List registered users, optionally with masked emails."""
    project = to_masked_view if masked else to_public_view
    return [project(u) for u in await users.list_users()]


@router.get("/users/me", response_model=UserPublic)
async def get_profile(current: User = Depends(get_current_user)):
    return to_public_view(current)


@router.put("/users/me/password", status_code=status.HTTP_204_NO_CONTENT)
async def change_password(
    body: PasswordChange,
    current: User = Depends(get_current_user),
    users: CredentialStore = Depends(get_credential_store),
):
    await users.change_password(
        current.email,
        body.current_password,
        body.new_password,
        body.confirm_password,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
