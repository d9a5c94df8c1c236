"""Database Session Manager — one async engine per process, one session per request.

Invariants:
    - A session that escapes with a SQLAlchemy exception is rolled back and the
      exception re-raised as StoreError (core/errors.py)
    - Connection pool uses pool_pre_ping for stale connection detection
    - get_db refuses to run before init_db (lifespan) has created the manager

Design Decisions:
    - Store adapters commit/rollback themselves; the manager is the backstop for
      anything a route left half-done
    - expire_on_commit=False: inserted rows stay readable after commit in async context
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import inspect, text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from app.core.errors import StoreError

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError are DBAPIErrors
_OPERATION_BY_ERROR: tuple[tuple[type[SQLAlchemyError], str], ...] = (
    (IntegrityError, "commit"),
    (OperationalError, "connect"),
    (DBAPIError, "query"),
    (SQLAlchemyError, "unknown"),
)


def describe_store_error(exc: SQLAlchemyError) -> str:
    """Driver message for a failed statement, without SQLAlchemy's SQL/params dump."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


def _operation_for(exc: SQLAlchemyError) -> str:
    for error_type, operation in _OPERATION_BY_ERROR:
        if isinstance(exc, error_type):
            return operation
    return "unknown"


class DatabaseSessionManager:
    """Owns the engine and hands out sessions that roll back on failure."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Session scoped to one unit of work; SQLAlchemy failures become StoreError."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            operation = _operation_for(e)
            message = describe_store_error(e)
            logger.error(
                f"Database {operation} failed: {message}",
                extra={"operation": operation},
            )
            raise StoreError(message, operation) from e
        finally:
            await session.close()

    async def missing_tables(self, table_names: list[str]) -> list[str]:
        """Names from table_names that the connected database does not have."""
        try:
            async with self.engine.connect() as conn:
                existing = await conn.run_sync(
                    lambda sync_conn: set(inspect(sync_conn).get_table_names()),
                )
        except SQLAlchemyError as e:
            raise StoreError(describe_store_error(e), "inspect") from e
        return [name for name in table_names if name not in existing]

    async def health_check(self) -> bool:
        """True when a trivial query round-trips (readiness probe)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except (StoreError, OSError) as e:
            logger.error(f"DB health check failed: {e}")
            return False
        return True


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
