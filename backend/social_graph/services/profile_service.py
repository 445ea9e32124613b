"""Profile Service — read-only profile projections for the calling user.

Invariants:
    - Batch lookups never fail on unknown ids; missing users are omitted
    - At most MAX_BATCH_IDS ids are looked up per call
"""

from social_graph.core.domain_types import MAX_BATCH_IDS, PublicId, UserRecord
from social_graph.core.exclusion_policy import ExclusionPolicy
from social_graph.core.profile_projection import project_profile, project_profiles
from social_graph.core.repository_protocols import RelationshipStore


class ProfileService:
    """Projects user records as seen by a viewer."""

    def __init__(self, store: RelationshipStore, policy: ExclusionPolicy):
        self.store = store
        self.policy = policy

    def me(self, viewer: UserRecord) -> dict:
        profile = project_profile(self.policy, viewer, viewer)
        profile["friends_count"] = len(viewer.friends)
        return profile

    async def batch(self, viewer: UserRecord, public_ids: list[PublicId]) -> dict:
        requested = public_ids[:MAX_BATCH_IDS]
        found = await self.store.find_users_by_public_ids(requested)
        return {"profiles": project_profiles(self.policy, viewer, requested, found)}
