"""Swap State: records, indices and events owned by the swap registry.

Invariants:
    - Swap.proposer != Swap.counterparty
    - Swap.child_counter_id is set at most once and never cleared
    - Swap.created_at and the parties are immutable after creation
    - BoundedSwapIndex holds at most `capacity` ids, oldest evicted first

Design Decisions:
    - Item sequences stored as tuples: callers cannot mutate a stored swap's items
    - BoundedSwapIndex wraps deque(maxlen=...): eviction policy explicit in one type
"""

from collections import deque
from dataclasses import dataclass, field, replace

from swapmatch.core.domain_types import (
    BlockHeight,
    Identity,
    ItemRef,
    SwapEventType,
    SwapId,
    SwapStatus,
    MAX_COUNTER_OFFER_DEPTH,
    MAX_EXPIRATION_WINDOW,
    MAX_ITEMS_PER_SIDE,
    MAX_USER_SWAPS,
)


@dataclass(frozen=True)
class SwapLimits:
    """Tunable ceilings for the registry. Defaults are the protocol constants."""
    max_items_per_side: int = MAX_ITEMS_PER_SIDE
    max_counter_offer_depth: int = MAX_COUNTER_OFFER_DEPTH
    max_expiration_window: int = MAX_EXPIRATION_WINDOW
    max_user_swaps: int = MAX_USER_SWAPS


@dataclass
class Swap:
    """A proposed or finalized exchange of two item sets."""

    id: SwapId
    proposer: Identity
    counterparty: Identity
    offered_items: tuple[ItemRef, ...]
    requested_items: tuple[ItemRef, ...]
    expiration: BlockHeight
    created_at: BlockHeight
    status: SwapStatus = SwapStatus.PENDING
    parent_id: SwapId | None = None
    child_counter_id: SwapId | None = None

    @property
    def is_pending(self) -> bool:
        return self.status == SwapStatus.PENDING

    @property
    def is_countered(self) -> bool:
        return self.child_counter_id is not None

    def involves(self, identity: Identity) -> bool:
        """Whether identity is either party of this swap."""
        return identity in (self.proposer, self.counterparty)

    def snapshot(self) -> "Swap":
        """Detached copy for read paths."""
        return replace(self)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "proposer": self.proposer,
            "counterparty": self.counterparty,
            "offered_items": list(self.offered_items),
            "requested_items": list(self.requested_items),
            "status": self.status.value,
            "expiration": self.expiration,
            "created_at": self.created_at,
            "parent_id": self.parent_id,
            "child_counter_id": self.child_counter_id,
        }


@dataclass(frozen=True)
class SwapEvent:
    """Fire-and-forget notification for external indexers."""
    event: SwapEventType
    swap_id: SwapId
    block_height: BlockHeight

    def to_dict(self) -> dict:
        return {
            "event": self.event.value,
            "swap_id": self.swap_id,
            "block_height": self.block_height,
        }


@dataclass
class BoundedSwapIndex:
    """Ordered swap ids for one identity, oldest first.

    When full, appending drops the oldest id (drop-oldest eviction).
    """

    capacity: int = MAX_USER_SWAPS
    _ids: deque = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.capacity < 1:
            raise ValueError("capacity must be >= 1")
        self._ids = deque(maxlen=self.capacity)

    def append(self, swap_id: SwapId) -> SwapId | None:
        """Add swap_id; return the evicted id, if any."""
        evicted = self._ids[0] if len(self._ids) == self.capacity else None
        self._ids.append(swap_id)
        return evicted

    def as_list(self) -> list[SwapId]:
        return list(self._ids)

    def __iter__(self):
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, swap_id: object) -> bool:
        return swap_id in self._ids
