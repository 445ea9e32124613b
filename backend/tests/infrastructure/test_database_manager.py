"""Database Session Manager — schema bootstrap, health check and error mapping."""

import pytest
from sqlalchemy import text

from social_graph.core.errors import DatabaseError
from social_graph.infrastructure.database import DatabaseSessionManager


@pytest.fixture
async def manager(tmp_path):
    mgr = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'graph.db'}")
    yield mgr
    await mgr.close()


async def test_create_schema_then_healthy(manager):
    await manager.create_schema()
    assert await manager.health_check() is True
    async with manager.session() as db:
        result = await db.execute(text("SELECT count(*) FROM friend_requests"))
        assert result.scalar_one() == 0


async def test_session_maps_sqlalchemy_errors(manager):
    with pytest.raises(DatabaseError):
        async with manager.session() as db:
            await db.execute(text("SELECT * FROM no_such_table"))
