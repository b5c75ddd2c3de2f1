"""Database Session Manager — async engine, per-request sessions, and store error mapping.

Invariants:
    - A failed commit rolls the session back before any error leaves this module
    - SQLAlchemy exceptions never reach a route: translate_db_error turns them into
      DevConnectorError (a unique-index hit on a known column becomes a ConflictError,
      everything else a DatabaseError)
    - Repositories commit through commit(), so the mapping applies inside the handler

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: prevents lazy-load issues in async context
    - Unique violations are matched on the index name (PostgreSQL) or the
      table.column pair (SQLite), whichever the driver reports
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

from devconnector.core.errors import (
    ConflictError, DatabaseError, DevConnectorError, Envelope,
)

logger = logging.getLogger(__name__)

# driver message marker -> (conflict message, envelope)
UNIQUE_CONFLICTS: dict[str, tuple[str, Envelope]] = {
    "ix_users_email": ("User already exists", Envelope.ERRORS),
    "users.email": ("User already exists", Envelope.ERRORS),
}


def translate_db_error(error: SQLAlchemyError) -> DevConnectorError:
    """Map a store failure to the error the API reports for it."""
    if isinstance(error, IntegrityError):
        detail = str(error.orig)
        for marker, (message, envelope) in UNIQUE_CONFLICTS.items():
            if marker in detail:
                logger.warning(
                    f"Unique violation on {marker}",
                    extra={"error_code": "CONFLICT"},
                )
                return ConflictError(message, envelope)
        operation, message = "commit", "Integrity constraint violated"
    elif isinstance(error, OperationalError):
        operation, message = "execute", "Connection or operational error"
    elif isinstance(error, DBAPIError):
        operation, message = "query", "Database driver error"
    else:
        operation, message = "unknown", "Database operation failed"
    logger.error(f"DB {operation} error: {error}")
    return DatabaseError(message, operation)


async def commit(db: AsyncSession) -> None:
    """Commit the unit of work; roll back and raise a domain error on failure."""
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise translate_db_error(e) from e


class DatabaseSessionManager:
    """Owns the engine and hands out sessions that roll back on failure."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_options = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_options.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self._bind(create_async_engine(database_url, **engine_options))

    @classmethod
    def from_engine(cls, engine: AsyncEngine) -> "DatabaseSessionManager":
        """Wrap an existing engine (tests build theirs in-memory)."""
        manager = cls.__new__(cls)
        manager._bind(engine)
        return manager

    def _bind(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self._session_factory = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            raise translate_db_error(e) from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """True when a trivial query round-trips."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


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
