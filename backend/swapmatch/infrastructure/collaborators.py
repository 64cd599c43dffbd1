"""Collaborators: placeholder implementations of the core's boundary Protocols.

Invariants:
    - OpenIdentityDirectory / OpenItemCatalog accept everything until real
      registration and item-listing services are wired in
    - ManualClock never moves backwards (ClockRegressionError)
    - InMemoryEventLog keeps at most `capacity` events, oldest dropped first

Design Decisions:
    - Call shapes match the Protocols exactly so replacements need no core change
    - Thread-safe clock and log: FastAPI runs sync routes on a threadpool
"""

import logging
import threading
from collections import deque
from collections.abc import Sequence

from swapmatch.core.domain_types import BlockHeight, Identity, ItemRef
from swapmatch.core.errors import ClockRegressionError, ErrorContext
from swapmatch.core.swap_state import SwapEvent

logger = logging.getLogger(__name__)


class OpenIdentityDirectory:
    """Every non-empty identity counts as registered."""

    def is_registered_identity(self, identity: Identity) -> bool:
        return bool(identity)


class OpenItemCatalog:
    """Item ownership is not checked yet; size bounds are enforced by the core."""

    def is_valid_item_set(self, items: Sequence[ItemRef], owner: Identity) -> bool:
        return True


class ManualClock:
    """Externally advanced block height, monotonic non-decreasing."""

    def __init__(self, height: int = 0):
        if height < 0:
            raise ValueError("block height must be >= 0")
        self._height = BlockHeight(height)
        self._lock = threading.Lock()

    def now(self) -> BlockHeight:
        return self._height

    def advance_to(self, height: int) -> BlockHeight:
        with self._lock:
            if height < self._height:
                raise ClockRegressionError(
                    self._height, height, ErrorContext(block_height=self._height),
                )
            self._height = BlockHeight(height)
            return self._height


class InMemoryEventLog:
    """Bounded log of recent swap events, also written to the application log."""

    def __init__(self, capacity: int = 1000):
        self._events: deque[SwapEvent] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def emit(self, event: SwapEvent) -> None:
        with self._lock:
            self._events.append(event)
        logger.info(
            f"swap-event {event.event.value} {event.swap_id}",
            extra={
                "event": event.event.value,
                "swap_id": event.swap_id,
                "block_height": event.block_height,
            },
        )

    def recent(self, limit: int | None = None) -> list[SwapEvent]:
        """Oldest-first; with limit, only the newest `limit` events."""
        with self._lock:
            events = list(self._events)
        if limit is not None:
            events = events[-limit:] if limit > 0 else []
        return events

    def __len__(self) -> int:
        return len(self._events)
