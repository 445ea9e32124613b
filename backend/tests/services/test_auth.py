"""Bearer Authentication — token verification and identity resolution.

Invariants verified:
    - Missing, malformed, wrongly signed or expired tokens → 401
    - A valid token for an unregistered identity → 401
    - The sub claim is normalized before lookup
"""

from datetime import datetime, timedelta, timezone

import pytest

from social_graph.config import get_settings
from social_graph.core.errors import UnauthenticatedError
from social_graph.infrastructure.auth import issue_token, verify_token
from social_graph.services.identity_resolver import resolve_identity

SECRET = "unit-test-secret-that-is-long-enough-for-hs256"
PROTECTED = "/api/v1/friends"


# ─── verify_token ────────────────────────────────────────────────

def test_verify_token_returns_sub():
    token = issue_token("alice@example.com", SECRET)
    assert verify_token(token, SECRET) == "alice@example.com"


def test_verify_token_wrong_secret():
    token = issue_token("alice@example.com", SECRET)
    with pytest.raises(UnauthenticatedError):
        verify_token(token, SECRET + "-other")


def test_verify_token_expired():
    past = datetime.now(timezone.utc) - timedelta(hours=1)
    token = issue_token("alice@example.com", SECRET, exp=past)
    with pytest.raises(UnauthenticatedError, match="Token expired"):
        verify_token(token, SECRET)


def test_verify_token_blank_sub():
    token = issue_token("   ", SECRET)
    with pytest.raises(UnauthenticatedError):
        verify_token(token, SECRET)


def test_verify_token_garbage():
    with pytest.raises(UnauthenticatedError):
        verify_token("not-a-jwt", SECRET)


# ─── resolve_identity ────────────────────────────────────────────

async def test_resolve_identity_normalizes(store, users):
    user = await resolve_identity(store, "  ALICE@Example.com ")
    assert user is not None
    assert user.public_id == "u1"


async def test_resolve_identity_unknown(store, users):
    assert await resolve_identity(store, "mallory@example.com") is None


async def test_resolve_identity_blank(store, users):
    assert await resolve_identity(store, "   ") is None


# ─── HTTP ────────────────────────────────────────────────────────

async def test_missing_header(client, users):
    res = await client.get(PROTECTED)
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHENTICATED"


async def test_invalid_token(client, users):
    res = await client.get(PROTECTED, headers={"Authorization": "Bearer nope"})
    assert res.status_code == 401


async def test_unregistered_identity(client, users):
    settings = get_settings()
    token = issue_token("mallory@example.com", settings.jwt_secret)
    res = await client.get(PROTECTED, headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 401


async def test_token_identity_is_case_insensitive(client, users):
    settings = get_settings()
    token = issue_token("Bob@Example.COM", settings.jwt_secret)
    res = await client.get(PROTECTED, headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 200
    assert res.json() == {"friends": []}
