"""Database Session Manager — async connection pool, per-request sessions, error mapping.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Uniqueness clashes (IntegrityError) become ConflictError (409) with a message
      naming the rule that was broken; handlers never catch IntegrityError themselves
    - Every other SQLAlchemy exception becomes DatabaseError (503)
    - Connection pool uses pool_pre_ping for stale connection detection

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
      (ADR: no global import side effects)
    - expire_on_commit=False: prevents lazy-load issues in async context
    - Pool sizing skipped for SQLite URLs: aiosqlite uses a static/null pool that rejects
      pool_size/max_overflow
    - Constraints matched by PostgreSQL constraint name or SQLite column list, so both
      backends report the same message
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from seepaw.core.errors import ConflictError, DatabaseError

logger = logging.getLogger(__name__)

# (constraint markers, message). A marker is the PostgreSQL constraint name or the
# column list SQLite prints in "UNIQUE constraint failed: ...".
UNIQUE_VIOLATIONS: tuple[tuple[tuple[str, ...], str], ...] = (
    (
        ("uq_activities_animal_start", "activities.animal_id, activities.start_date"),
        "An activity for this animal already starts at this time",
    ),
    (
        ("uq_favorites_user_animal", "favorites.user_id, favorites.animal_id"),
        "This animal is already among the user's favorites",
    ),
    (("breeds_name_key", "breeds.name"), "A breed with this name already exists"),
    (("users_email_key", "users.email"), "A user with this email already exists"),
)


def conflict_from_integrity_error(error: IntegrityError) -> ConflictError:
    """Name the broken uniqueness rule when it is a known one."""
    detail = str(error.orig)
    for markers, message in UNIQUE_VIOLATIONS:
        if any(marker in detail for marker in markers):
            return ConflictError(message, constraint=markers[0])
    return ConflictError("The change conflicts with existing data")


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs: dict = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self._bind(create_async_engine(database_url, **engine_kwargs))

    @classmethod
    def for_engine(cls, engine: AsyncEngine) -> "DatabaseSessionManager":
        """Manager over an engine built elsewhere (tests share one in-memory engine)."""
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
        """Provide session with auto-rollback and error mapping."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            conflict = conflict_from_integrity_error(e)
            logger.warning(
                f"Integrity conflict: {conflict.message}",
                extra={"error_code": conflict.code},
            )
            raise conflict from e
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}")
            raise DatabaseError("Connection or operational error", "execute")
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}")
            raise DatabaseError("Database driver error", "query")
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise DatabaseError("Database operation failed", "unknown")
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for the readiness check)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
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
