"""Alembic environment — migrations for the auth, profile and card tables.

The database URL comes from app.config.Settings (DATABASE_URL / .env), the
same source the running service uses; alembic.ini only carries logging config
and a docker-compose default. Online migrations run on an async engine.

Invariants:
    - target_metadata is Base.metadata after app.models is imported, so
      autogenerate sees auth_users, auth_sessions, profiles and cards
    - Migrations never run against SQLite test databases (tests use create_all)
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from app.config import get_settings
from app.db.base import Base
import app.models  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Settings already rewrites postgresql:// to postgresql+asyncpg://; "%" escaped for configparser
config.set_main_option(
    "sqlalchemy.url", get_settings().database_url.replace("%", "%%"),
)

target_metadata = Base.metadata


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit SQL for the card schema without connecting."""
    _configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _run_sync_migrations(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    engine = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_run_sync_migrations)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
