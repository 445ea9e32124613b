"""Profile Routes — own profile and batch lookup as seen by the caller.

Invariants verified:
    - Batch lookup omits unknown ids without error
    - identity_ref never appears in a response
    - is_excluded_from_viewer reflects only the caller's own exclusions
"""

import pytest

from social_graph.core.domain_types import IdentityRef, PublicId

BASE = "/api/v1/profiles"


async def test_me(client, users, auth):
    res = await client.get(f"{BASE}/me", headers=auth["u1"])
    assert res.status_code == 200
    assert res.json() == {
        "public_id": "u1",
        "display_name": "Alice",
        "picture": None,
        "is_excluded_from_viewer": False,
        "friends_count": 0,
    }


async def test_me_counts_friends(client, users, auth):
    await client.post(
        "/api/v1/friends/requests", json={"to_id": "u2"}, headers=auth["u1"],
    )
    await client.post("/api/v1/friends/requests/u1/approve", headers=auth["u2"])

    res = await client.get(f"{BASE}/me", headers=auth["u1"])
    assert res.json()["friends_count"] == 1


async def test_batch_omits_unknown(client, users, auth):
    res = await client.post(
        f"{BASE}/batch", json={"ids": ["u2", "doesnotexist"]}, headers=auth["u1"],
    )
    assert res.status_code == 200
    profiles = res.json()["profiles"]
    assert len(profiles) == 1
    assert profiles[0]["public_id"] == "u2"
    assert profiles[0]["display_name"] == "Bob"
    assert "identity_ref" not in profiles[0]
    assert "bob@example.com" not in res.text


async def test_batch_keeps_request_order(client, users, auth):
    res = await client.post(
        f"{BASE}/batch", json={"ids": ["u3", "u1", "u2"]}, headers=auth["u1"],
    )
    assert [p["public_id"] for p in res.json()["profiles"]] == ["u3", "u1", "u2"]


@pytest.mark.parametrize("variant", ["block", "avoid"])
async def test_excluded_flag_is_per_viewer(client, users, auth, use_variant, variant):
    use_variant(variant)
    await client.post(
        "/api/v1/exclusions", json={"target_id": "u2"}, headers=auth["u1"],
    )

    seen_by_u1 = await client.post(
        f"{BASE}/batch", json={"ids": ["u2"]}, headers=auth["u1"],
    )
    seen_by_u2 = await client.post(
        f"{BASE}/batch", json={"ids": ["u1"]}, headers=auth["u2"],
    )
    assert seen_by_u1.json()["profiles"][0]["is_excluded_from_viewer"] is True
    assert seen_by_u2.json()["profiles"][0]["is_excluded_from_viewer"] is False


async def test_batch_empty_ids(client, users, auth):
    res = await client.post(f"{BASE}/batch", json={"ids": []}, headers=auth["u1"])
    assert res.status_code == 400


async def test_batch_too_many_ids(client, users, auth):
    ids = [f"id{i}" for i in range(201)]
    res = await client.post(f"{BASE}/batch", json={"ids": ids}, headers=auth["u1"])
    assert res.status_code == 400


async def test_batch_picture_is_encoded(client, store, users, auth):
    await store.create_user(
        IdentityRef("dave@example.com"), "Dave",
        picture=b"\x00\x01", public_id=PublicId("u4"),
    )
    res = await client.post(f"{BASE}/batch", json={"ids": ["u4"]}, headers=auth["u1"])
    assert res.json()["profiles"][0]["picture"] == "AAE="
