"""Exclusion Routes — block/unblock (mutual-block) or avoid/unavoid (one-sided-avoid).

Invariants:
    - Same paths for both deployments; the response key names the active variant
      ({"blocked": true} vs {"avoided": true})
    - Unexclude is idempotent and does not require the target to exist
"""

from fastapi import APIRouter, Depends, Path

from social_graph.api.dependencies import get_current_user, get_engine
from social_graph.core.domain_types import PublicId, UserRecord
from social_graph.schemas.relationships import ExclusionCreate
from social_graph.services.friend_lifecycle import FriendLifecycleEngine

router = APIRouter(prefix="/api/v1/exclusions", tags=["exclusions"])


@router.get("")
async def list_exclusions(
    me: UserRecord = Depends(get_current_user),
    engine: FriendLifecycleEngine = Depends(get_engine),
):
    return engine.list_exclusions(me)


@router.post("")
async def exclude_user(
    body: ExclusionCreate,
    me: UserRecord = Depends(get_current_user),
    engine: FriendLifecycleEngine = Depends(get_engine),
):
    """Block or avoid another user."""
    return await engine.exclude(me, PublicId(body.target_id))


@router.delete("/{public_id}")
async def unexclude_user(
    public_id: str = Path(min_length=1, max_length=200),
    me: UserRecord = Depends(get_current_user),
    engine: FriendLifecycleEngine = Depends(get_engine),
):
    return await engine.unexclude(me, PublicId(public_id))
