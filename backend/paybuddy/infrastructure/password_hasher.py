"""Password Hasher — bcrypt implementation of the CredentialHasher protocol.

Invariants:
    - hash() salts per call (bcrypt generates a fresh salt each time)
    - verify() never raises on a malformed stored hash: it reports a mismatch
    - Cost factor comes from settings.password_hash_rounds

Design Decisions:
    - passlib CryptContext over calling bcrypt directly: the scheme list lets a
      future algorithm be added with deprecated="auto" without touching services
"""

import logging
from functools import lru_cache

from passlib.context import CryptContext

from paybuddy.config import get_settings

logger = logging.getLogger(__name__)


class BcryptHasher:
    """Salted, adaptive-cost password hashing."""

    def __init__(self, rounds: int = 12):
        self._context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds,
        )

    def hash(self, plaintext: str) -> str:
        return self._context.hash(plaintext)

    def verify(self, plaintext: str, hashed: str) -> bool:
        try:
            return self._context.verify(plaintext, hashed)
        except ValueError:
            logger.warning("Stored password hash is not a recognized bcrypt hash")
            return False


@lru_cache
def get_hasher() -> BcryptHasher:
    """FastAPI dependency — one hasher per process, configured from settings."""
    return BcryptHasher(rounds=get_settings().password_hash_rounds)
