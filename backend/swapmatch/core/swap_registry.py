"""Swap Registry: the proposal / acceptance / counter-offer state machine.

Invariants:
    - Every mutating operation is all-or-nothing: all preconditions are checked
      before the first write, and the whole operation runs under one lock
    - Swap ids are sequential from 1, never reused (_last_swap_id only increases)
    - A swap leaves PENDING at most once; ACCEPTED may then move to COMPLETED
    - Expiry is lazy: expired swaps stay PENDING and only fail accept()
    - Counter-offer depth is counted per id passed to counter_offer(), not per chain root
    - Events are emitted after the transition commits; a failing sink never
      rolls back or fails the operation

Design Decisions:
    - Owned registry object, no module-level state: one instance per app / test
    - RLock over single-writer queue: sync operations, FastAPI threadpool callers
    - Preconditions live in enforce_swap (pure); this module raises and mutates
"""

import logging
import threading
from collections.abc import Sequence

from swapmatch.core.domain_types import (
    BlockHeight,
    Identity,
    ItemRef,
    SwapEventType,
    SwapId,
    SwapStatus,
)
from swapmatch.core.enforce_swap import (
    matches_offer,
    validate_accept,
    validate_cancel,
    validate_complete,
    validate_counter,
    validate_parties,
    validate_terms,
)
from swapmatch.core.errors import ErrorContext, SwapMatchingError, SwapNotFoundError
from swapmatch.core.repository_protocols import (
    EventSink,
    IdentityDirectory,
    ItemCatalog,
    LogicalClock,
)
from swapmatch.core.swap_state import BoundedSwapIndex, Swap, SwapEvent, SwapLimits

logger = logging.getLogger(__name__)


class SwapRegistry:
    """Owns swap records, the id counter, per-user indices and counter-offer depth."""

    def __init__(
        self,
        identities: IdentityDirectory,
        catalog: ItemCatalog,
        clock: LogicalClock,
        finalizer: Identity,
        events: EventSink | None = None,
        limits: SwapLimits | None = None,
    ):
        self._identities = identities
        self._catalog = catalog
        self._clock = clock
        self._finalizer = finalizer
        self._events = events
        self._limits = limits or SwapLimits()

        self._swaps: dict[SwapId, Swap] = {}
        self._last_swap_id = 0
        self._user_swaps: dict[Identity, BoundedSwapIndex] = {}
        self._counter_offer_count: dict[SwapId, int] = {}
        self._lock = threading.RLock()

    @property
    def limits(self) -> SwapLimits:
        return self._limits

    @property
    def finalizer(self) -> Identity:
        return self._finalizer

    # --- Mutating operations ---------------------------------------------------

    def propose(
        self,
        counterparty: Identity,
        offered_items: Sequence[ItemRef],
        requested_items: Sequence[ItemRef],
        expiration: int,
        caller: Identity,
    ) -> SwapId:
        """Create a PENDING swap from caller to counterparty. Returns its id."""
        with self._lock:
            now = self._clock.now()
            self._check(validate_parties(caller, counterparty, self._identities))
            self._check(validate_terms(
                offered_items, requested_items, expiration,
                caller, counterparty, now, self._catalog, self._limits,
            ))

            swap = self._create_swap(
                caller, counterparty, offered_items, requested_items,
                expiration, now,
            )
            logger.info(
                f"Swap {swap.id} proposed by {caller} to {counterparty}",
                extra={"swap_id": swap.id, "caller": caller, "block_height": now},
            )
            self._emit(SwapEventType.PROPOSED, swap.id, now)
            return swap.id

    def accept(self, swap_id: SwapId, caller: Identity) -> bool:
        with self._lock:
            now = self._clock.now()
            swap = self._require_swap(swap_id, caller)
            self._check(validate_accept(swap, caller, now))

            swap.status = SwapStatus.ACCEPTED
            logger.info(
                f"Swap {swap_id} accepted by {caller}",
                extra={"swap_id": swap_id, "caller": caller, "block_height": now},
            )
            self._emit(SwapEventType.ACCEPTED, swap_id, now)
            return True

    def cancel(self, swap_id: SwapId, caller: Identity) -> bool:
        with self._lock:
            now = self._clock.now()
            swap = self._require_swap(swap_id, caller)
            self._check(validate_cancel(swap, caller))

            swap.status = SwapStatus.CANCELLED
            logger.info(
                f"Swap {swap_id} cancelled by {caller}",
                extra={"swap_id": swap_id, "caller": caller, "block_height": now},
            )
            self._emit(SwapEventType.CANCELLED, swap_id, now)
            return True

    def counter_offer(
        self,
        original_swap_id: SwapId,
        offered_items: Sequence[ItemRef],
        requested_items: Sequence[ItemRef],
        expiration: int,
        caller: Identity,
    ) -> SwapId:
        """Counter a PENDING swap with a new one, roles reversed. Returns the new id.

        The original moves to COUNTERED and records the new id as its child.
        """
        with self._lock:
            now = self._clock.now()
            original = self._require_swap(original_swap_id, caller)
            count = self._counter_offer_count.get(original_swap_id, 0)
            self._check(validate_counter(original, caller, count, self._limits))
            self._check(validate_terms(
                offered_items, requested_items, expiration,
                caller, original.proposer, now, self._catalog, self._limits,
            ))

            counter = self._create_swap(
                caller, original.proposer, offered_items, requested_items,
                expiration, now, parent_id=original_swap_id,
            )
            original.child_counter_id = counter.id
            original.status = SwapStatus.COUNTERED
            self._counter_offer_count[original_swap_id] = count + 1

            logger.info(
                f"Swap {original_swap_id} countered by {caller} with swap {counter.id}",
                extra={"swap_id": counter.id, "caller": caller, "block_height": now},
            )
            self._emit(SwapEventType.COUNTERED, counter.id, now)
            return counter.id

    def complete(self, swap_id: SwapId, caller: Identity) -> bool:
        """Finalizer hand-back after escrow has released the assets."""
        with self._lock:
            now = self._clock.now()
            swap = self._require_swap(swap_id, caller)
            self._check(validate_complete(swap, caller, self._finalizer))

            swap.status = SwapStatus.COMPLETED
            logger.info(
                f"Swap {swap_id} completed",
                extra={"swap_id": swap_id, "caller": caller, "block_height": now},
            )
            self._emit(SwapEventType.COMPLETED, swap_id, now)
            return True

    # --- Queries ---------------------------------------------------------------

    def get_swap_details(self, swap_id: SwapId) -> Swap | None:
        with self._lock:
            swap = self._swaps.get(swap_id)
            return swap.snapshot() if swap else None

    def get_user_swaps(self, user: Identity) -> list[SwapId]:
        with self._lock:
            index = self._user_swaps.get(user)
            return index.as_list() if index else []

    def find_potential_matches(
        self, user: Identity, offered_items: Sequence[ItemRef],
    ) -> list[SwapId]:
        """Pending swaps whose requested items overlap offered_items.

        Candidates come from the user's own index only, so swaps the user is
        not already a party to are never surfaced.
        """
        with self._lock:
            index = self._user_swaps.get(user)
            if not index:
                return []
            return [
                swap_id for swap_id in index
                if matches_offer(self._swaps[swap_id], user, offered_items)
            ]

    def get_swap_chain(self, swap_id: SwapId) -> list[SwapId]:
        """Ids from the chain root down to swap_id, ascending."""
        with self._lock:
            swap = self._swaps.get(swap_id)
            if swap is None:
                return []
            chain = [swap.id]
            for _ in range(self._limits.max_counter_offer_depth):
                if swap.parent_id is None:
                    break
                swap = self._swaps[swap.parent_id]
                chain.append(swap.id)
            chain.reverse()
            return chain

    def get_last_swap_id(self) -> int:
        with self._lock:
            return self._last_swap_id

    def get_counter_offer_count(self, swap_id: SwapId) -> int:
        with self._lock:
            return self._counter_offer_count.get(swap_id, 0)

    # --- Internals -------------------------------------------------------------

    def _create_swap(
        self,
        proposer: Identity,
        counterparty: Identity,
        offered_items: Sequence[ItemRef],
        requested_items: Sequence[ItemRef],
        expiration: int,
        now: BlockHeight,
        parent_id: SwapId | None = None,
    ) -> Swap:
        new_id = SwapId(self._last_swap_id + 1)
        swap = Swap(
            id=new_id,
            proposer=proposer,
            counterparty=counterparty,
            offered_items=tuple(offered_items),
            requested_items=tuple(requested_items),
            expiration=BlockHeight(expiration),
            created_at=now,
            parent_id=parent_id,
        )
        self._swaps[new_id] = swap
        self._index(proposer, new_id)
        self._index(counterparty, new_id)
        self._last_swap_id = new_id
        return swap

    def _index(self, user: Identity, swap_id: SwapId) -> None:
        index = self._user_swaps.get(user)
        if index is None:
            index = BoundedSwapIndex(self._limits.max_user_swaps)
            self._user_swaps[user] = index
        evicted = index.append(swap_id)
        if evicted is not None:
            logger.debug(
                f"Evicted swap {evicted} from {user}'s index",
                extra={"swap_id": evicted, "caller": user},
            )

    def _require_swap(self, swap_id: SwapId, caller: Identity) -> Swap:
        swap = self._swaps.get(swap_id)
        if swap is None:
            self._check(SwapNotFoundError(
                swap_id, ErrorContext(swap_id=swap_id, caller=caller),
            ))
        return swap

    def _check(self, error: SwapMatchingError | None) -> None:
        if error is None:
            return
        logger.info(
            f"Rejected: {error.message}",
            extra={
                "error_code": error.code,
                "swap_id": error.context.swap_id,
                "caller": error.context.caller,
            },
        )
        raise error

    def _emit(
        self, event_type: SwapEventType, swap_id: SwapId, now: BlockHeight,
    ) -> None:
        if self._events is None:
            return
        try:
            self._events.emit(SwapEvent(event_type, swap_id, now))
        except Exception as e:
            logger.warning(
                f"Event sink failed for {event_type.value} on swap {swap_id}: {e}",
                extra={"swap_id": swap_id, "event": event_type.value},
                exc_info=True,
            )
