"""Root conftest: shared test configuration and registry fixtures."""

import os

import pytest

# Keep tests independent of any local .env
os.environ.setdefault("SWAPMATCH_LOG_FORMAT", "text")
os.environ.setdefault("SWAPMATCH_FINALIZER_IDENTITY", "deployer")

from swapmatch.core.swap_registry import SwapRegistry  # noqa: E402
from swapmatch.infrastructure.collaborators import (  # noqa: E402
    InMemoryEventLog,
    ManualClock,
    OpenIdentityDirectory,
    OpenItemCatalog,
)

FINALIZER = "deployer"
START_HEIGHT = 1000


@pytest.fixture
def clock():
    return ManualClock(START_HEIGHT)


@pytest.fixture
def event_log():
    return InMemoryEventLog()


@pytest.fixture
def registry(clock, event_log):
    """Fresh registry at block height 1000 with permissive collaborators."""
    return SwapRegistry(
        identities=OpenIdentityDirectory(),
        catalog=OpenItemCatalog(),
        clock=clock,
        finalizer=FINALIZER,
        events=event_log,
    )
