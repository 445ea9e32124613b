"""Relationship Rule Enforcement — validates friend-request and exclusion preconditions.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Return the typed error on violation, None on success
    - validate_* chains run checks in a fixed order — first error wins
    - Exclusion gates only fire when the policy gates interaction (mutual-block)

Design Decisions:
    - Return errors (not raise): checks are testable without pytest.raises and the
      engine decides when to raise (ADR: Functional Core)
    - Existence of the target user is passed in as an Optional record: the engine
      does the lookup, the rule only interprets the result
"""

from social_graph.core.domain_types import PublicId, UserRecord
from social_graph.core.errors import (
    AlreadyFriendsError,
    ExcludedError,
    InvalidRequestError,
    ResourceNotFoundError,
    SelfReferenceError,
    SocialGraphError,
)
from social_graph.core.exclusion_policy import ExclusionPolicy


def check_not_self(
    actor: UserRecord, target_id: PublicId, action: str,
) -> SocialGraphError | None:
    """Rule: create/exclude may not target the caller."""
    if target_id == actor.public_id:
        return SelfReferenceError(action)
    return None


def check_not_self_invalid(
    actor: UserRecord, target_id: PublicId,
) -> SocialGraphError | None:
    """Rule: approve/unfriend on self is an invalid request (not a self-reference)."""
    if target_id == actor.public_id:
        return InvalidRequestError()
    return None


def check_user_exists(
    user: UserRecord | None, public_id: PublicId,
) -> SocialGraphError | None:
    """Rule: the referenced user record must exist."""
    if user is None:
        return ResourceNotFoundError("User", public_id)
    return None


def check_not_excluded(
    policy: ExclusionPolicy, actor: UserRecord, other: UserRecord,
) -> SocialGraphError | None:
    """Rule: no interaction across a block (mutual-block variant only)."""
    if policy.gates_interaction and policy.excludes(actor, other):
        return ExcludedError(other.public_id)
    return None


def check_not_already_friends(
    actor: UserRecord, target: UserRecord,
) -> SocialGraphError | None:
    """Rule: no request to someone already in the requester's friend set."""
    if actor.is_friend(target.public_id):
        return AlreadyFriendsError(target.public_id)
    return None


def validate_create_request(
    policy: ExclusionPolicy,
    requester: UserRecord,
    target_id: PublicId,
    target: UserRecord | None,
) -> SocialGraphError | None:
    """Chain Create checks: self → existence → exclusion → already friends."""
    error = (
        check_not_self(requester, target_id, "friend")
        or check_user_exists(target, target_id)
    )
    if error:
        return error
    return (
        check_not_excluded(policy, requester, target)
        or check_not_already_friends(requester, target)
    )


def validate_approve_request(
    policy: ExclusionPolicy,
    approver: UserRecord,
    from_id: PublicId,
    request_exists: bool,
    requester: UserRecord | None,
) -> SocialGraphError | None:
    """Chain Approve checks: self → request existence → requester existence → exclusion."""
    error = check_not_self_invalid(approver, from_id)
    if error:
        return error
    if not request_exists:
        return ResourceNotFoundError("Request", from_id)
    error = check_user_exists(requester, from_id)
    if error:
        return error
    return check_not_excluded(policy, approver, requester)


def validate_exclude(
    actor: UserRecord,
    target_id: PublicId,
    target: UserRecord | None,
    action: str = "block",
) -> SocialGraphError | None:
    """Chain Exclude checks: self → existence."""
    return (
        check_not_self(actor, target_id, action)
        or check_user_exists(target, target_id)
    )
