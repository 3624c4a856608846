"""Root conftest — shared test configuration."""

import os

# Cheapest bcrypt cost factor; keeps register/login tests fast
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("LOG_FORMAT", "text")
