"""Database Session Manager — engine, per-request sessions and readiness check.

Invariants:
    - Exactly one manager per process, created and closed by the FastAPI lifespan
      and reachable only through app.state.db_manager
    - A session that exits with a SQLAlchemy error is rolled back and the error
      re-raised as DatabaseError (generic message, details in the log)
    - pool_pre_ping on every engine; pool sizing only where the driver pools

Design Decisions:
    - expire_on_commit=False: the store commits per primitive and keeps using
      the rows it just wrote
    - create_schema runs Base.metadata.create_all, giving the unique constraints
      and indexes the request lifecycle depends on without running alembic
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from social_graph.core.errors import DatabaseError
from social_graph.db.base import Base
import social_graph.models  # noqa: F401  (populate Base.metadata)

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError are DBAPIErrors
_FAILED_OPERATION = (
    (IntegrityError, "commit"),
    (OperationalError, "execute"),
    (DBAPIError, "query"),
    (SQLAlchemyError, "operation"),
)


def _operation_for(exc: SQLAlchemyError) -> str:
    return next(op for kind, op in _FAILED_OPERATION if isinstance(exc, kind))


class DatabaseSessionManager:
    """Owns the async engine and hands out sessions."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        options = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            options.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **options)
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            operation = _operation_for(e)
            logger.error(
                f"Session aborted: {e}", extra={"operation": operation},
            )
            raise DatabaseError(operation)
        finally:
            await session.close()

    async def create_schema(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured")

    async def health_check(self) -> bool:
        """SELECT 1 through a fresh session; False on any failure."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except (DatabaseError, OSError) as e:
            logger.error(f"Database not ready: {e}")
            return False
        return True

    async def close(self) -> None:
        await self.engine.dispose()
        logger.info("Database engine disposed")


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request from the lifespan-owned manager."""
    db_manager: DatabaseSessionManager | None = getattr(
        request.app.state, "db_manager", None,
    )
    if db_manager is None:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
