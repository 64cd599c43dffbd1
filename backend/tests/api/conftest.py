"""API test fixtures: FastAPI test client over isolated swap services.

Invariants:
    - Every test gets fresh SwapServices (new registry, clock at 1000, empty event log)
    - get_services dependency overridden; the process-wide singleton is never touched
"""

import pytest
from httpx import ASGITransport, AsyncClient

from swapmatch.config import Settings
from swapmatch.main import app
from swapmatch.services.swap_services import build_swap_services, get_services


@pytest.fixture
def swap_services():
    return build_swap_services(Settings(
        initial_block_height=1000, finalizer_identity="deployer",
    ))


@pytest.fixture
async def client(swap_services):
    """FastAPI test client with services dependency overridden."""
    app.dependency_overrides[get_services] = lambda: swap_services

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()