"""Friend-Request Lifecycle Engine — request, approve, reject, cancel, unfriend, exclude.

Invariants:
    - Every operation re-reads store state; nothing is cached between calls
    - Rule checks (core/enforce_relationships.py) run before any mutation
    - Approve adds BOTH friend directions before deleting BOTH request directions;
      every sub-step is idempotent, so a failed approve is repaired by retrying it
    - Create does NOT look at the reverse-direction request: A→B and B→A may both be
      pending until one side approves, which then clears both
    - Racing creates on one ordered pair: the store's unique constraint picks a
      winner, the loser gets DuplicateRequestError
    - Racing approve vs reject/cancel: whichever delete lands first wins; a late
      reject/cancel sees NotFound, a late approve sees NotFound at its existence check

Design Decisions:
    - Exclusion semantics injected as a policy object (mutual-block or one-sided-avoid)
      chosen once at startup, so one engine serves both deployments
    - No cross-record transaction: the store commits per primitive and the engine
      composes idempotent steps (eventual consistency, never manual repair)
    - Returns JSON-ready dicts, routes pass them through unchanged
"""

import logging

from social_graph.core.domain_types import PublicId, RelationKind, UserRecord
from social_graph.core.enforce_relationships import (
    check_not_self_invalid,
    validate_approve_request,
    validate_create_request,
    validate_exclude,
)
from social_graph.core.errors import (
    DuplicateRequestError,
    RequestConflictError,
    ResourceNotFoundError,
)
from social_graph.core.exclusion_policy import ExclusionPolicy, exclusion_labels
from social_graph.core.normalize import clamp_page
from social_graph.core.repository_protocols import RelationshipStore

logger = logging.getLogger(__name__)


class FriendLifecycleEngine:
    """Orchestrates the friend-request state machine over a RelationshipStore."""

    def __init__(self, store: RelationshipStore, policy: ExclusionPolicy):
        self.store = store
        self.policy = policy

    # ─── Requests ───────────────────────────────────────────────

    async def create_request(self, requester: UserRecord, target_id: PublicId) -> dict:
        """Send a friend request from requester to target_id."""
        target = None
        if target_id != requester.public_id:
            target = await self.store.find_user_by_public_id(target_id)

        error = validate_create_request(self.policy, requester, target_id, target)
        if error:
            raise error

        try:
            await self.store.insert_request(requester.public_id, target_id)
        except RequestConflictError:
            raise DuplicateRequestError(target_id)

        logger.info(
            "Friend request created",
            extra={"public_id": requester.public_id, "target_id": target_id},
        )
        return {"requested": True}

    async def list_incoming(
        self, user: UserRecord, limit: int | None = None, offset: int | None = None,
    ) -> dict:
        page = clamp_page(limit, offset)
        requests = await self.store.find_requests_by_to(user.public_id, page)
        return {
            "requests": [r.to_dict() for r in requests],
            "pagination": page.to_dict(),
        }

    async def list_outgoing(
        self, user: UserRecord, limit: int | None = None, offset: int | None = None,
    ) -> dict:
        page = clamp_page(limit, offset)
        requests = await self.store.find_requests_by_from(user.public_id, page)
        return {
            "requests": [r.to_dict() for r in requests],
            "pagination": page.to_dict(),
        }

    async def approve(self, approver: UserRecord, from_id: PublicId) -> dict:
        """Accept the request from_id → approver and make the pair friends."""
        request_exists = False
        requester = None
        if from_id != approver.public_id:
            request_exists = await self.store.request_exists(
                from_id, approver.public_id,
            )
            if request_exists:
                requester = await self.store.find_user_by_public_id(from_id)

        error = validate_approve_request(
            self.policy, approver, from_id, request_exists, requester,
        )
        if error:
            raise error

        # friend sets first, then requests: a crash in between leaves friends
        # plus a stale request, which a retried approve clears
        await self.store.add_to_set(approver.public_id, RelationKind.FRIEND, from_id)
        await self.store.add_to_set(from_id, RelationKind.FRIEND, approver.public_id)
        await self.store.delete_request(from_id, approver.public_id)
        await self.store.delete_request(approver.public_id, from_id)

        logger.info(
            "Friend request approved",
            extra={"public_id": approver.public_id, "target_id": from_id},
        )
        return {"approved": True}

    async def reject(self, rejecter: UserRecord, from_id: PublicId) -> dict:
        """Drop the request from_id → rejecter. Leaves the reverse direction alone."""
        removed = await self.store.delete_request(from_id, rejecter.public_id)
        if not removed:
            raise ResourceNotFoundError("Request", from_id)
        logger.info(
            "Friend request rejected",
            extra={"public_id": rejecter.public_id, "target_id": from_id},
        )
        return {"rejected": True}

    async def cancel(self, canceller: UserRecord, to_id: PublicId) -> dict:
        """Withdraw the caller's own request canceller → to_id."""
        removed = await self.store.delete_request(canceller.public_id, to_id)
        if not removed:
            raise ResourceNotFoundError("Request", to_id)
        logger.info(
            "Friend request cancelled",
            extra={"public_id": canceller.public_id, "target_id": to_id},
        )
        return {"cancelled": True}

    # ─── Friendships ────────────────────────────────────────────

    def list_friends(self, user: UserRecord) -> dict:
        return {"friends": list(user.friends)}

    async def unfriend(self, user: UserRecord, other_id: PublicId) -> dict:
        """Remove the friendship both ways. Succeeds even if they were not friends."""
        error = check_not_self_invalid(user, other_id)
        if error:
            raise error
        await self.store.remove_from_set(user.public_id, RelationKind.FRIEND, other_id)
        await self.store.remove_from_set(other_id, RelationKind.FRIEND, user.public_id)
        logger.info(
            "Friendship removed",
            extra={"public_id": user.public_id, "target_id": other_id},
        )
        return {"unfriended": True}

    # ─── Exclusions ─────────────────────────────────────────────

    def list_exclusions(self, user: UserRecord) -> dict:
        return {
            "exclusions": list(user.exclusions),
            "variant": self.policy.variant.value,
        }

    async def exclude(self, user: UserRecord, target_id: PublicId) -> dict:
        """Block (or avoid) target_id.

        Under a gating policy the pair is also severed: friendship removed both ways
        and pending requests deleted in both directions.
        """
        target = None
        if target_id != user.public_id:
            target = await self.store.find_user_by_public_id(target_id)
        error = validate_exclude(
            user, target_id, target, action=self.policy.variant.value,
        )
        if error:
            raise error

        await self.store.add_to_set(user.public_id, RelationKind.EXCLUSION, target_id)
        if self.policy.gates_interaction:
            await self.store.remove_from_set(
                user.public_id, RelationKind.FRIEND, target_id,
            )
            await self.store.remove_from_set(
                target_id, RelationKind.FRIEND, user.public_id,
            )
            await self.store.delete_request(user.public_id, target_id)
            await self.store.delete_request(target_id, user.public_id)

        logger.info(
            "Exclusion added",
            extra={
                "public_id": user.public_id,
                "target_id": target_id,
                "variant": self.policy.variant.value,
            },
        )
        done_label, _ = exclusion_labels(self.policy)
        return {done_label: True}

    async def unexclude(self, user: UserRecord, target_id: PublicId) -> dict:
        """Idempotently lift an exclusion. No existence check on the target."""
        await self.store.remove_from_set(
            user.public_id, RelationKind.EXCLUSION, target_id,
        )
        logger.info(
            "Exclusion removed",
            extra={"public_id": user.public_id, "target_id": target_id},
        )
        _, undone_label = exclusion_labels(self.policy)
        return {undone_label: True}
