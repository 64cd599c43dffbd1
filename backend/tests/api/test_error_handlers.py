"""Error handler tests: every failure renders the envelope with request context.

Invariants:
    - Validation failures carry per-field details plus swap_id / caller from the request
    - Unhandled exceptions become a generic 500 that does not leak the message
    - Shell failures log with error_code and path extras
"""

import logging
from types import SimpleNamespace

from httpx import ASGITransport, AsyncClient

from swapmatch.main import app
from swapmatch.services.swap_services import get_services


class _BrokenRegistry:
    def accept(self, swap_id, caller):
        raise RuntimeError("ledger storage offline")


async def test_validation_error_includes_swap_context(client):
    res = await client.post(
        "/api/v1/swaps/7/counter",
        json={"offered_items": "abc"},
        headers={"X-Caller": "wallet_2"},
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["category"] == "validation"
    assert error["context"] == {"swap_id": 7, "caller": "wallet_2"}
    fields = {d["field"] for d in error["details"]}
    assert {"body.offered_items", "body.requested_items", "body.expiration"} <= fields


async def test_validation_error_without_swap_path(client):
    res = await client.post("/api/v1/swaps", json={})
    error = res.json()["error"]
    assert error["context"] == {"swap_id": None, "caller": None}
    assert "header.x-caller" in {d["field"] for d in error["details"]}


async def test_validation_error_logged_with_path(client, caplog):
    with caplog.at_level(logging.WARNING, logger="swapmatch.api.error_handlers"):
        await client.post("/api/v1/swaps/3/accept")
    record = caplog.records[-1]
    assert record.error_code == "VALIDATION_ERROR"
    assert record.path == "/api/v1/swaps/3/accept"
    assert record.swap_id == 3


async def test_domain_error_logged_with_swap_id(client, caplog):
    with caplog.at_level(logging.WARNING, logger="swapmatch.api.error_handlers"):
        await client.post("/api/v1/swaps/5/accept", headers={"X-Caller": "wallet_2"})
    record = caplog.records[-1]
    assert record.error_code == "SWAP_NOT_FOUND"
    assert record.swap_id == 5
    assert record.caller == "wallet_2"


async def test_unhandled_error_is_generic_500(caplog):
    broken = SimpleNamespace(registry=_BrokenRegistry())
    app.dependency_overrides[get_services] = lambda: broken
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://test",
        ) as c:
            with caplog.at_level(logging.ERROR, logger="swapmatch.api.error_handlers"):
                res = await c.post(
                    "/api/v1/swaps/2/accept", headers={"X-Caller": "wallet_2"},
                )
    finally:
        app.dependency_overrides.clear()

    assert res.status_code == 500
    error = res.json()["error"]
    assert error["code"] == "INTERNAL_ERROR"
    assert error["context"] == {"swap_id": 2, "caller": "wallet_2"}
    assert "offline" not in res.text
    record = caplog.records[-1]
    assert record.error_code == "INTERNAL_ERROR"
    assert record.exc_info is not None
