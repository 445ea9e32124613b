"""Service test fixtures — async DB, seeded users and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - app.state.db_manager swapped for a manager bound to the test engine
    - app.state.exclusion_policy restored after each client test
    - Three registered users: u1 (alice), u2 (bob), u3 (carol)

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for store and
      route tests (PostgreSQL-specific features not exercised here)
    - The real get_db dependency stays in place: it reads app.state.db_manager,
      so swapping the manager also covers the lifespan-owned path
    - State assertions go through load_user (fresh session per read) so they
      never depend on a session shared with the request under test
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from social_graph.config import get_settings
from social_graph.core.domain_types import ExclusionVariant, IdentityRef, PublicId
from social_graph.core.exclusion_policy import (
    MutualBlockPolicy, OneSidedAvoidPolicy, select_policy,
)
from social_graph.db.base import Base
from social_graph.infrastructure.auth import issue_token
from social_graph.infrastructure.database import DatabaseSessionManager
from social_graph.infrastructure.relationship_store import SqlRelationshipStore
from social_graph.main import app
from social_graph.services.friend_lifecycle import FriendLifecycleEngine

SEED_USERS = (
    ("u1", "alice@example.com", "Alice"),
    ("u2", "bob@example.com", "Bob"),
    ("u3", "carol@example.com", "Carol"),
)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def store(test_db):
    return SqlRelationshipStore(test_db)


@pytest.fixture
async def users(store):
    """Register the seed users; returns {public_id: UserRecord}."""
    seeded = {}
    for public_id, identity, name in SEED_USERS:
        seeded[public_id] = await store.create_user(
            IdentityRef(identity), name, public_id=PublicId(public_id),
        )
    return seeded


@pytest.fixture
def load_user(test_session_factory):
    """Re-read a user in a fresh session (current friends/exclusions)."""

    async def _load(public_id: str):
        async with test_session_factory() as session:
            return await SqlRelationshipStore(session).find_user_by_public_id(
                PublicId(public_id),
            )

    return _load


@pytest.fixture
def block_engine(store):
    return FriendLifecycleEngine(store, MutualBlockPolicy())


@pytest.fixture
def avoid_engine(store):
    return FriendLifecycleEngine(store, OneSidedAvoidPolicy())


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client bound to the in-memory database."""
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory

    original_manager = getattr(app.state, "db_manager", None)
    original_policy = app.state.exclusion_policy
    app.state.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.state.db_manager = original_manager
    app.state.exclusion_policy = original_policy


@pytest.fixture
def use_variant():
    """Switch the app's exclusion policy; the client fixture restores it."""

    def _use(variant: ExclusionVariant | str):
        app.state.exclusion_policy = select_policy(variant)

    return _use


def bearer(identity: str) -> dict[str, str]:
    settings = get_settings()
    token = issue_token(identity, settings.jwt_secret, settings.jwt_algorithm)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth():
    """Authorization headers per seeded public id."""
    return {public_id: bearer(identity) for public_id, identity, _ in SEED_USERS}
