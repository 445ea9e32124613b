"""Request Dependencies — wires auth, store, policy and services per request.

Invariants:
    - One AsyncSession per request, shared by every dependency below (FastAPI caches
      dependencies within a request)
    - get_current_user raises UnauthenticatedError when the verified principal has
      no registered user — the engine never sees an anonymous caller
    - The exclusion policy is read from app.state, set once at startup
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from social_graph.core.domain_types import UserRecord
from social_graph.core.errors import UnauthenticatedError
from social_graph.core.exclusion_policy import ExclusionPolicy
from social_graph.infrastructure.auth import get_principal
from social_graph.infrastructure.database import get_db
from social_graph.infrastructure.relationship_store import SqlRelationshipStore
from social_graph.services.friend_lifecycle import FriendLifecycleEngine
from social_graph.services.identity_resolver import resolve_identity
from social_graph.services.profile_service import ProfileService


def get_exclusion_policy(request: Request) -> ExclusionPolicy:
    return request.app.state.exclusion_policy


def get_store(db: AsyncSession = Depends(get_db)) -> SqlRelationshipStore:
    return SqlRelationshipStore(db)


async def get_current_user(
    principal: str = Depends(get_principal),
    store: SqlRelationshipStore = Depends(get_store),
) -> UserRecord:
    user = await resolve_identity(store, principal)
    if user is None:
        raise UnauthenticatedError()
    return user


def get_engine(
    store: SqlRelationshipStore = Depends(get_store),
    policy: ExclusionPolicy = Depends(get_exclusion_policy),
) -> FriendLifecycleEngine:
    return FriendLifecycleEngine(store, policy)


def get_profile_service(
    store: SqlRelationshipStore = Depends(get_store),
    policy: ExclusionPolicy = Depends(get_exclusion_policy),
) -> ProfileService:
    return ProfileService(store, policy)
