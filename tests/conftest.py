"""Root conftest — shared test configuration."""

import os

# Ensure tests never sign tokens with the production default
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-0123456789abcdef0123")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
