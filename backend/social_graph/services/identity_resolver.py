"""Identity Resolver — verified principal → registered user record.

Invariants:
    - Pure lookup: no side effects, no auto-registration
    - Principal normalized (stripped, lower-cased) before lookup
    - None means authenticated-but-unregistered; callers treat it as unauthenticated
"""

from social_graph.core.domain_types import UserRecord
from social_graph.core.normalize import normalize_identity
from social_graph.core.repository_protocols import RelationshipStore


async def resolve_identity(
    store: RelationshipStore, principal: str,
) -> UserRecord | None:
    identity_ref = normalize_identity(principal)
    if not identity_ref:
        return None
    return await store.find_user_by_identity_ref(identity_ref)
