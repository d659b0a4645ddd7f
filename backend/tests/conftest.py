"""Root conftest — shared test configuration."""

import os

# Ensure tests never pick up a real secret or database
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
