"""Root conftest — shared test configuration."""

import os

# Ensure tests never sign tokens with a production secret or hit a real database
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
# bcrypt minimum cost: keeps the suite fast
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")
