"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Every store method is individually atomic; callers compose them without
      a cross-record transaction

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, but the pure rules in core/ that
      interpret results are never async themselves — the service layer orchestrates
    - Set mutations are idempotent by contract (add twice / remove twice is a no-op),
      which is what makes composite operations safe to retry
"""

from datetime import datetime
from typing import Protocol

from social_graph.core.domain_types import (
    FriendRequestRecord,
    IdentityRef,
    Page,
    PublicId,
    RelationKind,
    UserRecord,
)


class RelationshipStore(Protocol):
    """Contract for users, set-valued relations and pending requests — implemented by shell."""

    async def find_user_by_public_id(self, public_id: PublicId) -> UserRecord | None: ...
    async def find_user_by_identity_ref(
        self, identity_ref: IdentityRef,
    ) -> UserRecord | None: ...
    async def find_users_by_public_ids(
        self, public_ids: list[PublicId],
    ) -> list[UserRecord]: ...
    async def create_user(
        self,
        identity_ref: IdentityRef,
        display_name: str,
        picture: bytes | str | None = None,
        public_id: PublicId | None = None,
    ) -> UserRecord: ...

    async def request_exists(self, from_id: PublicId, to_id: PublicId) -> bool: ...
    async def insert_request(
        self, from_id: PublicId, to_id: PublicId, created_at: datetime | None = None,
    ) -> FriendRequestRecord: ...
    async def delete_request(self, from_id: PublicId, to_id: PublicId) -> int: ...
    async def find_requests_by_to(
        self, to_id: PublicId, page: Page,
    ) -> list[FriendRequestRecord]: ...
    async def find_requests_by_from(
        self, from_id: PublicId, page: Page,
    ) -> list[FriendRequestRecord]: ...

    async def add_to_set(
        self, owner_id: PublicId, kind: RelationKind, value: PublicId,
    ) -> bool: ...
    async def remove_from_set(
        self, owner_id: PublicId, kind: RelationKind, value: PublicId,
    ) -> int: ...
