"""Swap Routes: HTTP surface of the swap state machine.

Invariants:
    - Every mutating route maps 1:1 to a SwapRegistry operation
    - Domain failures propagate as SwapMatchingError to the global handler
    - GET /swaps/{id} returns 404 for unknown ids; the registry itself never fails

Design Decisions:
    - Sync handlers: FastAPI runs them on its threadpool, the registry lock serializes them
    - /swaps/last-id declared before /swaps/{swap_id} so it is not parsed as an id
"""

from fastapi import APIRouter, status

from swapmatch.api.dependencies import Caller, Registry
from swapmatch.core.domain_types import ItemRef, SwapId
from swapmatch.core.errors import ErrorContext, SwapNotFoundError
from swapmatch.schemas.swap import (
    Acknowledgement,
    CounterOfferCreate,
    SwapCreated,
    SwapIdList,
    SwapProposal,
    SwapResponse,
)

router = APIRouter(prefix="/api/v1/swaps", tags=["swaps"])


def _items(values: list[int]) -> list[ItemRef]:
    return [ItemRef(v) for v in values]


@router.post(
    "", response_model=SwapCreated, status_code=status.HTTP_201_CREATED,
)
def propose_swap(body: SwapProposal, caller: Caller, registry: Registry):
    """Propose a new swap from the caller to body.counterparty."""
    swap_id = registry.propose(
        counterparty=body.counterparty,
        offered_items=_items(body.offered_items),
        requested_items=_items(body.requested_items),
        expiration=body.expiration,
        caller=caller,
    )
    return SwapCreated(swap_id=swap_id)


@router.get("/last-id")
def get_last_swap_id(registry: Registry):
    return {"last_swap_id": registry.get_last_swap_id()}


@router.get("/{swap_id}", response_model=SwapResponse)
def get_swap(swap_id: int, registry: Registry):
    swap = registry.get_swap_details(SwapId(swap_id))
    if swap is None:
        raise SwapNotFoundError(swap_id, ErrorContext(swap_id=swap_id))
    return SwapResponse(**swap.to_dict())


@router.get("/{swap_id}/chain", response_model=SwapIdList)
def get_swap_chain(swap_id: int, registry: Registry):
    """Counter-offer lineage, root first. Empty for unknown ids."""
    return SwapIdList(swap_ids=registry.get_swap_chain(SwapId(swap_id)))


@router.post("/{swap_id}/accept", response_model=Acknowledgement)
def accept_swap(swap_id: int, caller: Caller, registry: Registry):
    return Acknowledgement(ok=registry.accept(SwapId(swap_id), caller))


@router.post("/{swap_id}/cancel", response_model=Acknowledgement)
def cancel_swap(swap_id: int, caller: Caller, registry: Registry):
    return Acknowledgement(ok=registry.cancel(SwapId(swap_id), caller))


@router.post(
    "/{swap_id}/counter", response_model=SwapCreated,
    status_code=status.HTTP_201_CREATED,
)
def counter_offer(
    swap_id: int, body: CounterOfferCreate, caller: Caller, registry: Registry,
):
    new_id = registry.counter_offer(
        SwapId(swap_id),
        offered_items=_items(body.offered_items),
        requested_items=_items(body.requested_items),
        expiration=body.expiration,
        caller=caller,
    )
    return SwapCreated(swap_id=new_id)


@router.post("/{swap_id}/complete", response_model=Acknowledgement)
def complete_swap(swap_id: int, caller: Caller, registry: Registry):
    """Escrow finalizer marks an accepted swap as settled."""
    return Acknowledgement(ok=registry.complete(SwapId(swap_id), caller))
