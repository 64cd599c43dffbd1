"""Swap Precondition Enforcement: pure validators for the swap state machine.

Invariants:
    - Every validator is PURE: returns an error instance or None, never raises
    - The registry raises the returned error; no mutation happens here
    - Check order inside each validator is fixed (first failing check wins)

Design Decisions:
    - Separated from the registry: preconditions testable without building state
    - Capabilities passed in as arguments, not looked up globally
"""

from collections.abc import Sequence

from swapmatch.core.domain_types import BlockHeight, Identity, ItemRef, SwapStatus
from swapmatch.core.errors import (
    CounterOfferExistsError,
    ErrorContext,
    ExpiredError,
    InvalidExpirationError,
    InvalidItemError,
    InvalidStatusError,
    NotAuthorizedError,
    NotProposedToError,
    SelfSwapError,
    SwapMatchingError,
)
from swapmatch.core.repository_protocols import IdentityDirectory, ItemCatalog
from swapmatch.core.swap_state import Swap, SwapLimits


def item_count_in_bounds(items: Sequence[ItemRef], limits: SwapLimits) -> bool:
    return 0 < len(items) <= limits.max_items_per_side


def expiration_in_window(
    expiration: int, now: BlockHeight, limits: SwapLimits,
) -> bool:
    """Expiration must lie in (now, now + window]."""
    return now < expiration <= now + limits.max_expiration_window


def validate_terms(
    offered_items: Sequence[ItemRef],
    requested_items: Sequence[ItemRef],
    expiration: int,
    offerer: Identity,
    requestee: Identity,
    now: BlockHeight,
    catalog: ItemCatalog,
    limits: SwapLimits,
) -> SwapMatchingError | None:
    """Offered items, requested items, then expiration."""
    ctx = ErrorContext(caller=offerer, block_height=now)
    if not (
        item_count_in_bounds(offered_items, limits)
        and catalog.is_valid_item_set(offered_items, offerer)
    ):
        return InvalidItemError("offered", ctx)
    if not (
        item_count_in_bounds(requested_items, limits)
        and catalog.is_valid_item_set(requested_items, requestee)
    ):
        return InvalidItemError("requested", ctx)
    if not expiration_in_window(expiration, now, limits):
        return InvalidExpirationError(
            expiration, now, limits.max_expiration_window, ctx,
        )
    return None


def validate_parties(
    caller: Identity, counterparty: Identity, identities: IdentityDirectory,
) -> SwapMatchingError | None:
    """Self-swap first, then caller registration, then counterparty registration."""
    ctx = ErrorContext(caller=caller)
    if caller == counterparty:
        return SelfSwapError(ctx)
    if not identities.is_registered_identity(caller):
        return NotAuthorizedError(f"{caller} is not a registered identity", ctx)
    if not identities.is_registered_identity(counterparty):
        return NotAuthorizedError(
            f"{counterparty} is not a registered identity", ctx,
        )
    return None


def validate_accept(
    swap: Swap, caller: Identity, now: BlockHeight,
) -> SwapMatchingError | None:
    """A countered swap always reports COUNTER_OFFER_EXISTS, ahead of status and expiry."""
    ctx = ErrorContext(swap_id=swap.id, caller=caller, block_height=now)
    if caller != swap.counterparty:
        return NotProposedToError(ctx)
    if swap.is_countered:
        return CounterOfferExistsError(
            f"Swap {swap.id} was countered by swap {swap.child_counter_id}", ctx,
        )
    if not swap.is_pending:
        return InvalidStatusError(
            swap.status.value, SwapStatus.PENDING.value, ctx,
        )
    if now >= swap.expiration:
        return ExpiredError(swap.expiration, ctx)
    return None


def validate_cancel(swap: Swap, caller: Identity) -> SwapMatchingError | None:
    ctx = ErrorContext(swap_id=swap.id, caller=caller)
    if not swap.involves(caller):
        return NotAuthorizedError("only a party to the swap may cancel it", ctx)
    if not swap.is_pending:
        return InvalidStatusError(
            swap.status.value, SwapStatus.PENDING.value, ctx,
        )
    return None


def validate_counter(
    swap: Swap, caller: Identity, counter_count: int, limits: SwapLimits,
) -> SwapMatchingError | None:
    """Counter-offer preconditions that precede the terms check."""
    ctx = ErrorContext(swap_id=swap.id, caller=caller)
    if caller != swap.counterparty:
        return NotProposedToError(ctx)
    if not swap.is_pending:
        return InvalidStatusError(
            swap.status.value, SwapStatus.PENDING.value, ctx,
        )
    if counter_count >= limits.max_counter_offer_depth:
        return CounterOfferExistsError(
            f"Counter-offer limit ({limits.max_counter_offer_depth}) "
            f"reached for swap {swap.id}",
            ctx,
        )
    return None


def validate_complete(
    swap: Swap, caller: Identity, finalizer: Identity,
) -> SwapMatchingError | None:
    ctx = ErrorContext(swap_id=swap.id, caller=caller)
    if caller != finalizer:
        return NotAuthorizedError("only the finalizer may complete a swap", ctx)
    if swap.status != SwapStatus.ACCEPTED:
        return InvalidStatusError(
            swap.status.value, SwapStatus.ACCEPTED.value, ctx,
        )
    return None


def matches_offer(
    swap: Swap, user: Identity, offered_items: Sequence[ItemRef],
) -> bool:
    """Pending, user not a party, and requested items intersect the offer."""
    return (
        swap.is_pending
        and not swap.involves(user)
        and not set(swap.requested_items).isdisjoint(offered_items)
    )
