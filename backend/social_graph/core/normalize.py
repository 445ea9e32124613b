"""Input Normalization — identity and pagination values before they reach the store.

Invariants:
    - normalize_identity is idempotent: normalize(normalize(x)) == normalize(x)
    - clamp_page always yields 1 <= limit <= MAX_PAGE_LIMIT and offset >= 0
"""

from social_graph.core.domain_types import (
    DEFAULT_PAGE_LIMIT,
    MAX_PAGE_LIMIT,
    IdentityRef,
    Page,
)


def normalize_identity(raw: str) -> IdentityRef:
    """Trim and lower-case an authenticated identity (e.g. e-mail from the `sub` claim)."""
    return IdentityRef(raw.strip().lower())


def clamp_page(limit: int | None = None, offset: int | None = None) -> Page:
    """Bound pagination when the HTTP layer did not (e.g. direct engine callers)."""
    if limit is None:
        limit = DEFAULT_PAGE_LIMIT
    if offset is None:
        offset = 0
    return Page(
        limit=min(max(limit, 1), MAX_PAGE_LIMIT),
        offset=max(offset, 0),
    )
