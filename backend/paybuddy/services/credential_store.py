"""Credential Store — registration, lookup, verification and password change.

Invariants:
    - Plaintext passwords never reach the DB: exactly one hash call per
      successful register/change_password
    - Email uniqueness is checked here AND enforced by the users.email unique
      constraint; a lost race surfaces as AlreadyExistsError, not a 500
    - verify_credentials returns False for unknown email and wrong password alike
    - Each write is a single commit on the request session

Design Decisions:
    - Hasher injected (CredentialHasher protocol): services never import passlib
    - bcrypt is CPU-bound, so hash and verify run in the threadpool and the
      event loop keeps serving other requests meanwhile
    - change_password keeps distinct "not found" / "wrong password" messages as
      the profile flow always did (enumeration hardening tracked in DESIGN.md)
"""

import logging

from fastapi.concurrency import run_in_threadpool
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from paybuddy.core.enforce_password import check_password_confirmation
from paybuddy.core.errors import AlreadyExistsError, ErrorContext, ValidationError
from paybuddy.core.repository_protocols import CredentialHasher
from paybuddy.models.user import User

logger = logging.getLogger(__name__)


class CredentialStore:
    """User identity and password handling."""

    def __init__(self, db: AsyncSession, hasher: CredentialHasher):
        self.db = db
        self.hasher = hasher

    async def register(self, username: str, email: str, password: str) -> User:
        """Create a user with a hashed password. Raises AlreadyExistsError on duplicate email."""
        if await self.find_by_email(email) is not None:
            logger.warning("Registration rejected: email already in use")
            raise AlreadyExistsError("user", email)

        hashed = await run_in_threadpool(self.hasher.hash, password)
        user = User(username=username, email=email, password=hashed)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.warning("Registration lost a race on users.email")
            raise AlreadyExistsError("user", email)

        logger.info("User registered", extra={"user_id": user.id})
        return user

    async def find_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def find_by_id(self, user_id: int) -> User | None:
        return await self.db.get(User, user_id)

    async def list_users(self) -> list[User]:
        result = await self.db.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    async def _password_matches(self, user: User, password: str) -> bool:
        return await run_in_threadpool(self.hasher.verify, password, user.password)

    async def authenticate(self, email: str, password: str) -> User | None:
        """The user behind these credentials, or None. One lookup, one verify."""
        user = await self.find_by_email(email)
        if user is None or not await self._password_matches(user, password):
            return None
        return user

    async def verify_credentials(self, email: str, password: str) -> bool:
        return await self.authenticate(email, password) is not None

    async def change_password(
        self,
        email: str,
        current_password: str,
        new_password: str,
        confirm_password: str,
    ) -> None:
        """Re-hash and persist a new password after checking the current one."""
        user = await self.find_by_email(email)
        if user is None:
            raise ValidationError("User not found", "email")
        if not await self._password_matches(user, current_password):
            raise ValidationError(
                "Current password is incorrect", "current_password",
                ErrorContext(user_id=user.id),
            )
        check_password_confirmation(new_password, confirm_password)

        user.password = await run_in_threadpool(self.hasher.hash, new_password)
        await self.db.commit()
        logger.info("Password changed", extra={"user_id": user.id})
