"""Friend Routes — friend-request lifecycle and friend list endpoints.

Invariants:
    - Every route requires a registered caller (get_current_user)
    - Shape validated here (Pydantic body, Path/Query bounds); relationship rules
      live in the engine
    - Success payloads are the engine's dicts, passed through unchanged

Design Decisions:
    - Request ids in paths are the OTHER user's public id: approve/reject take the
      sender, cancel takes the recipient
"""

from fastapi import APIRouter, Depends, Path, Query, status

from social_graph.api.dependencies import get_current_user, get_engine
from social_graph.core.domain_types import (
    DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT, PublicId, UserRecord,
)
from social_graph.schemas.relationships import FriendRequestCreate
from social_graph.services.friend_lifecycle import FriendLifecycleEngine

router = APIRouter(prefix="/api/v1/friends", tags=["friends"])


@router.post("/requests", status_code=status.HTTP_201_CREATED)
async def create_friend_request(
    body: FriendRequestCreate,
    me: UserRecord = Depends(get_current_user),
    engine: FriendLifecycleEngine = Depends(get_engine),
):
    """Send a friend request."""
    return await engine.create_request(me, PublicId(body.to_id))


@router.get("/requests/incoming")
async def list_incoming_requests(
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    me: UserRecord = Depends(get_current_user),
    engine: FriendLifecycleEngine = Depends(get_engine),
):
    """Requests addressed to the caller, newest first."""
    return await engine.list_incoming(me, limit, offset)


@router.get("/requests/outgoing")
async def list_outgoing_requests(
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    me: UserRecord = Depends(get_current_user),
    engine: FriendLifecycleEngine = Depends(get_engine),
):
    """Requests sent by the caller, newest first."""
    return await engine.list_outgoing(me, limit, offset)


@router.post("/requests/{public_id}/approve")
async def approve_friend_request(
    public_id: str = Path(min_length=1, max_length=200),
    me: UserRecord = Depends(get_current_user),
    engine: FriendLifecycleEngine = Depends(get_engine),
):
    """Approve the request sent by public_id."""
    return await engine.approve(me, PublicId(public_id))


@router.post("/requests/{public_id}/reject")
async def reject_friend_request(
    public_id: str = Path(min_length=1, max_length=200),
    me: UserRecord = Depends(get_current_user),
    engine: FriendLifecycleEngine = Depends(get_engine),
):
    """Reject the request sent by public_id."""
    return await engine.reject(me, PublicId(public_id))


@router.delete("/requests/{public_id}")
async def cancel_friend_request(
    public_id: str = Path(min_length=1, max_length=200),
    me: UserRecord = Depends(get_current_user),
    engine: FriendLifecycleEngine = Depends(get_engine),
):
    """Cancel the caller's request to public_id."""
    return await engine.cancel(me, PublicId(public_id))


@router.get("")
async def list_friends(
    me: UserRecord = Depends(get_current_user),
    engine: FriendLifecycleEngine = Depends(get_engine),
):
    return engine.list_friends(me)


@router.delete("/{public_id}")
async def unfriend(
    public_id: str = Path(min_length=1, max_length=200),
    me: UserRecord = Depends(get_current_user),
    engine: FriendLifecycleEngine = Depends(get_engine),
):
    """Remove a friendship in both directions (idempotent)."""
    return await engine.unfriend(me, PublicId(public_id))
