"""Exclusion Routes — block/unblock and avoid/unavoid over one set of paths.

Invariants verified:
    - Response keys follow the deployment's variant
    - Blocking severs an existing friendship; avoiding does not
    - Unexclude is idempotent and needs no existing target
"""

BASE = "/api/v1/exclusions"


async def test_block_and_list(client, users, auth, use_variant):
    use_variant("block")
    res = await client.post(BASE, json={"target_id": "u2"}, headers=auth["u1"])
    assert res.status_code == 200
    assert res.json() == {"blocked": True}

    res = await client.get(BASE, headers=auth["u1"])
    assert res.json() == {"exclusions": ["u2"], "variant": "block"}


async def test_unblock(client, users, auth, use_variant):
    use_variant("block")
    await client.post(BASE, json={"target_id": "u2"}, headers=auth["u1"])

    res = await client.delete(f"{BASE}/u2", headers=auth["u1"])
    assert res.status_code == 200
    assert res.json() == {"unblocked": True}

    res = await client.get(BASE, headers=auth["u1"])
    assert res.json()["exclusions"] == []


async def test_unblock_unknown_user_is_ok(client, users, auth, use_variant):
    use_variant("block")
    res = await client.delete(f"{BASE}/nobody", headers=auth["u1"])
    assert res.status_code == 200


async def test_block_self(client, users, auth, use_variant):
    use_variant("block")
    res = await client.post(BASE, json={"target_id": "u1"}, headers=auth["u1"])
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Cannot block yourself"


async def test_block_unknown_user(client, users, auth):
    res = await client.post(BASE, json={"target_id": "nobody"}, headers=auth["u1"])
    assert res.status_code == 404


async def test_block_removes_friendship(client, users, auth, use_variant, load_user):
    use_variant("block")
    await client.post(
        "/api/v1/friends/requests", json={"to_id": "u2"}, headers=auth["u1"],
    )
    await client.post("/api/v1/friends/requests/u1/approve", headers=auth["u2"])

    await client.post(BASE, json={"target_id": "u1"}, headers=auth["u2"])

    assert (await load_user("u1")).friends == ()
    assert (await load_user("u2")).friends == ()


async def test_avoid_labels_and_keeps_friendship(
    client, users, auth, use_variant, load_user,
):
    use_variant("avoid")
    await client.post(
        "/api/v1/friends/requests", json={"to_id": "u2"}, headers=auth["u1"],
    )
    await client.post("/api/v1/friends/requests/u1/approve", headers=auth["u2"])

    res = await client.post(BASE, json={"target_id": "u1"}, headers=auth["u2"])
    assert res.json() == {"avoided": True}
    assert (await load_user("u2")).friends == ("u1",)

    res = await client.get(BASE, headers=auth["u2"])
    assert res.json() == {"exclusions": ["u1"], "variant": "avoid"}

    res = await client.delete(f"{BASE}/u1", headers=auth["u2"])
    assert res.json() == {"unavoided": True}


async def test_exclusion_requires_auth(client, users):
    res = await client.post(BASE, json={"target_id": "u2"})
    assert res.status_code == 401
