"""User Routes: per-user swap index and match lookup over HTTP."""

USER1 = "wallet_1"
USER2 = "wallet_2"


async def _propose(client, requested=(3,)):
    await client.post(
        "/api/v1/swaps",
        json={
            "counterparty": USER2, "offered_items": [1],
            "requested_items": list(requested), "expiration": 1100,
        },
        headers={"X-Caller": USER1},
    )


async def test_user_swaps_oldest_first(client):
    await _propose(client)
    await _propose(client)
    res = await client.get(f"/api/v1/users/{USER1}/swaps")
    assert res.json() == {"swap_ids": [1, 2]}
    res = await client.get(f"/api/v1/users/{USER2}/swaps")
    assert res.json() == {"swap_ids": [1, 2]}


async def test_unknown_user_has_no_swaps(client):
    res = await client.get("/api/v1/users/nobody/swaps")
    assert res.status_code == 200
    assert res.json() == {"swap_ids": []}


async def test_matches_exclude_own_swaps(client):
    await _propose(client, requested=(7,))
    res = await client.post(
        f"/api/v1/users/{USER2}/matches", json={"offered_items": [7]},
    )
    assert res.status_code == 200
    assert res.json() == {"swap_ids": []}
