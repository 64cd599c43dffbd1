"""Boundary Protocols: contracts between the swap core and its collaborators.

Invariants:
    - Core NEVER imports from infrastructure; dependency arrows point inward only
    - Identity, item validity, clock and event delivery reached only through these Protocols
    - Implementations provided by the shell via constructor injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Sync methods: every registry operation completes without suspending
"""

from collections.abc import Sequence
from typing import Protocol, TYPE_CHECKING

from swapmatch.core.domain_types import BlockHeight, Identity, ItemRef

if TYPE_CHECKING:
    from swapmatch.core.swap_state import SwapEvent


class IdentityDirectory(Protocol):
    """Contract for the identity/registration collaborator."""
    def is_registered_identity(self, identity: Identity) -> bool: ...


class ItemCatalog(Protocol):
    """Contract for the item-listing/ownership collaborator."""
    def is_valid_item_set(
        self, items: Sequence[ItemRef], owner: Identity,
    ) -> bool: ...


class LogicalClock(Protocol):
    """Source of the monotonic block height. The core only reads it."""
    def now(self) -> BlockHeight: ...


class EventSink(Protocol):
    """Receives domain events after each committed transition."""
    def emit(self, event: "SwapEvent") -> None: ...
