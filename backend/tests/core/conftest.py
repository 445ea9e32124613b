"""Core test fixtures — in-memory UserRecord builders for pure rule tests."""

import pytest

from social_graph.core.domain_types import IdentityRef, PublicId, UserRecord


@pytest.fixture
def make_user():
    """Build a UserRecord; identity defaults to '<public_id>@example.com'."""

    def _make(
        public_id: str,
        friends: tuple[str, ...] = (),
        exclusions: tuple[str, ...] = (),
        display_name: str | None = None,
        picture: bytes | str | None = None,
    ) -> UserRecord:
        return UserRecord(
            internal_key=f"key-{public_id}",
            identity_ref=IdentityRef(f"{public_id}@example.com"),
            public_id=PublicId(public_id),
            display_name=display_name or public_id.upper(),
            picture=picture,
            friends=tuple(PublicId(f) for f in friends),
            exclusions=tuple(PublicId(e) for e in exclusions),
        )

    return _make
