"""Profile Routes — caller's own profile and batch profile lookup.

Invariants:
    - Responses never include identity_ref or the internal key (response_model filters)
    - Batch lookup silently omits unknown ids
"""

from fastapi import APIRouter, Depends

from social_graph.api.dependencies import get_current_user, get_profile_service
from social_graph.core.domain_types import PublicId, UserRecord
from social_graph.schemas.relationships import (
    MeResponse,
    ProfileBatchRequest,
    ProfileBatchResponse,
)
from social_graph.services.profile_service import ProfileService

router = APIRouter(prefix="/api/v1/profiles", tags=["profiles"])


@router.get("/me", response_model=MeResponse)
async def get_my_profile(
    me: UserRecord = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
):
    return profiles.me(me)


@router.post("/batch", response_model=ProfileBatchResponse)
async def get_profiles(
    body: ProfileBatchRequest,
    me: UserRecord = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
):
    """Profiles for up to 200 public ids, as seen by the caller."""
    return await profiles.batch(me, [PublicId(i) for i in body.ids])
