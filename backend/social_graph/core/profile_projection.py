"""Profile Projection — the subset of a user record that another user may see.

Invariants:
    - Output never contains identity_ref or internal_key
    - is_excluded_from_viewer reflects the VIEWER's exclusion list only
    - Batch projection preserves request order, drops unknown and repeated ids

Design Decisions:
    - Binary pictures base64-encoded here, strings passed through: the store keeps
      whatever the provisioning side wrote
"""

import base64
from collections.abc import Iterable

from social_graph.core.domain_types import PublicId, UserRecord
from social_graph.core.exclusion_policy import ExclusionPolicy


def encode_picture(picture: bytes | str | None) -> str | None:
    if picture is None:
        return None
    if isinstance(picture, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(picture)).decode("ascii")
    return picture


def project_profile(
    policy: ExclusionPolicy, viewer: UserRecord, subject: UserRecord,
) -> dict:
    return {
        "public_id": subject.public_id,
        "display_name": subject.display_name,
        "picture": encode_picture(subject.picture),
        "is_excluded_from_viewer": policy.viewer_excludes(viewer, subject),
    }


def project_profiles(
    policy: ExclusionPolicy,
    viewer: UserRecord,
    requested_ids: Iterable[PublicId],
    found: Iterable[UserRecord],
) -> list[dict]:
    """Project found users in the order they were requested."""
    by_id = {user.public_id: user for user in found}
    seen: set[PublicId] = set()
    profiles = []
    for public_id in requested_ids:
        subject = by_id.get(public_id)
        if subject is None or public_id in seen:
            continue
        seen.add(public_id)
        profiles.append(project_profile(policy, viewer, subject))
    return profiles
