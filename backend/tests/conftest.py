"""Root conftest — shared test configuration."""

import os

# Tests never touch a real Postgres
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("LOG_FORMAT", "text")
# Cheap hashing keeps fixture users fast
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")
