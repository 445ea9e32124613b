"""Relationship Schemas — Pydantic request bodies with shape validation for API boundaries.

Invariants:
    - Every public id: 1-200 chars
    - ProfileBatchRequest.ids: 1-200 items
    - Shape only: self-reference and existence are engine rules, not schema rules

Design Decisions:
    - Annotated PublicIdField reused across bodies and path params
"""

from typing import Annotated

from pydantic import BaseModel, Field

from social_graph.core.domain_types import MAX_BATCH_IDS

PublicIdField = Annotated[str, Field(min_length=1, max_length=200)]


class FriendRequestCreate(BaseModel):
    """Send a friend request to another user."""
    to_id: PublicIdField


class ExclusionCreate(BaseModel):
    """Block (mutual-block) or avoid (one-sided-avoid) another user."""
    target_id: PublicIdField


class ProfileBatchRequest(BaseModel):
    """Look up several profiles at once; unknown ids are skipped."""
    ids: list[PublicIdField] = Field(min_length=1, max_length=MAX_BATCH_IDS)


class ProfileResponse(BaseModel):
    """Profile as seen by the caller — never includes identity or internal key."""
    public_id: str
    display_name: str
    picture: str | None = None
    is_excluded_from_viewer: bool = False


class MeResponse(ProfileResponse):
    """Caller's own profile with a friend count."""
    friends_count: int = 0


class ProfileBatchResponse(BaseModel):
    profiles: list[ProfileResponse]
