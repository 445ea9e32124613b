"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - PublicId is the only user identifier that crosses the API boundary
    - IdentityRef is always normalized (stripped, lower-cased) before lookup
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and bind to DB string columns without converters
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

PublicId = NewType("PublicId", str)
IdentityRef = NewType("IdentityRef", str)


# ─── Pagination Bounds ───────────────────────────────────────────

DEFAULT_PAGE_LIMIT = 50
MAX_PAGE_LIMIT = 200
MAX_BATCH_IDS = 200


# ─── Enums ───────────────────────────────────────────────────────

class ExclusionVariant(str, Enum):
    """Deployment-wide exclusion semantics. Chosen once at startup."""
    BLOCK = "block"
    AVOID = "avoid"


class RelationKind(str, Enum):
    """Set-valued fields on a user — maps to user_relations.kind column."""
    FRIEND = "friend"
    EXCLUSION = "exclusion"


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class UserRecord:
    """Snapshot of a user as read from the store. Never cached across operations."""
    internal_key: str
    identity_ref: IdentityRef
    public_id: PublicId
    display_name: str
    picture: bytes | str | None = None
    friends: tuple[PublicId, ...] = ()
    exclusions: tuple[PublicId, ...] = ()
    created_at: datetime | None = None

    def is_friend(self, other: PublicId) -> bool:
        return other in self.friends

    def has_excluded(self, other: PublicId) -> bool:
        return other in self.exclusions


@dataclass(frozen=True)
class FriendRequestRecord:
    """One pending directed request."""
    from_id: PublicId
    to_id: PublicId
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "from_id": self.from_id,
            "to_id": self.to_id,
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class Page:
    """Bounded offset/limit window for list reads."""
    limit: int = DEFAULT_PAGE_LIMIT
    offset: int = 0

    def to_dict(self) -> dict:
        return {"limit": self.limit, "offset": self.offset}
