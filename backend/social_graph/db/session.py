"""Standalone Sessions — async DB sessions for code running outside FastAPI.

Invariants:
    - Uses the same SQLAlchemy settings as DatabaseSessionManager (expire_on_commit=False)
    - The engine created here is disposed when the context exits

Design Decisions:
    - Separate from infrastructure/database.py: provisioning scripts and alembic-free
      bootstraps need a session without an application lifespan
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from social_graph.db.base import Base
import social_graph.models  # noqa: F401  (populate Base.metadata)


def create_session_factory(
    database_url: str,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory for the given database URL."""
    engine = create_async_engine(database_url, echo=False)
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )


@asynccontextmanager
async def standalone_session(
    database_url: str, create_schema: bool = False,
) -> AsyncGenerator[AsyncSession, None]:
    """One session on a private engine; optionally create missing tables first."""
    factory = create_session_factory(database_url)
    engine = factory.kw["bind"]
    try:
        if create_schema:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        async with factory() as session:
            yield session
    finally:
        await engine.dispose()
