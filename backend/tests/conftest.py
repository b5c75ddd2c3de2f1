"""Root conftest — shared test configuration."""

import os

# Set before devconnector.config is imported: get_settings() is cached
os.environ.setdefault(
    "JWT_SECRET", "test-secret-that-is-long-enough-for-hs256",
)
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("LOG_FORMAT", "text")
