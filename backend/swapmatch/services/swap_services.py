"""Swap Services: wires the registry to its collaborators for the HTTP shell.

Invariants:
    - Exactly one SwapServices per process, created by init_services() on startup
    - get_services() is the only route-facing accessor (overridable in tests)
    - Registry limits and finalizer come from Settings, never hardcoded here

Design Decisions:
    - Singleton initialized from lifespan, same lifecycle as other startup resources
    - Lazy creation in get_services() is double-checked under a lock: concurrent
      first requests share one registry
    - build_swap_services() is pure wiring: tests build isolated instances with it
"""

import logging
import threading
from dataclasses import dataclass

from swapmatch.config import Settings, get_settings
from swapmatch.core.domain_types import Identity
from swapmatch.core.swap_registry import SwapRegistry
from swapmatch.infrastructure.collaborators import (
    InMemoryEventLog,
    ManualClock,
    OpenIdentityDirectory,
    OpenItemCatalog,
)

logger = logging.getLogger(__name__)


@dataclass
class SwapServices:
    """Registry plus the shell-owned collaborators routes need direct access to."""
    registry: SwapRegistry
    clock: ManualClock
    event_log: InMemoryEventLog


def build_swap_services(settings: Settings) -> SwapServices:
    clock = ManualClock(settings.initial_block_height)
    event_log = InMemoryEventLog(settings.event_log_size)
    registry = SwapRegistry(
        identities=OpenIdentityDirectory(),
        catalog=OpenItemCatalog(),
        clock=clock,
        finalizer=Identity(settings.finalizer_identity),
        events=event_log,
        limits=settings.swap_limits,
    )
    return SwapServices(registry=registry, clock=clock, event_log=event_log)


services: SwapServices | None = None
_services_lock = threading.Lock()


def init_services(settings: Settings) -> SwapServices:
    """Create the process-wide services. Called once from the app lifespan."""
    with _services_lock:
        return _install(settings)


def get_services() -> SwapServices:
    """FastAPI dependency: the process-wide services, created lazily if needed."""
    if services is None:
        with _services_lock:
            if services is None:
                return _install(get_settings())
    return services


def _install(settings: Settings) -> SwapServices:
    """Build and publish the singleton. Caller holds _services_lock."""
    global services
    services = build_swap_services(settings)
    logger.info(
        f"Swap registry ready (finalizer={settings.finalizer_identity}, "
        f"height={settings.initial_block_height})",
    )
    return services
