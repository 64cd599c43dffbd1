"""Swap Schemas: Pydantic models for swap API boundaries.

Invariants:
    - Request fields are typed only: item-set size, expiration window and
      counterparty identity are judged by the registry, so the HTTP layer
      reports the same error codes in the same order as direct calls
    - Block heights set through the clock route are non-negative ints
    - Responses mirror Swap.to_dict() / SwapEvent.to_dict()
"""

from pydantic import BaseModel, Field


class SwapProposal(BaseModel):
    """POST /swaps body."""
    counterparty: str
    offered_items: list[int]
    requested_items: list[int]
    expiration: int


class CounterOfferCreate(BaseModel):
    """POST /swaps/{id}/counter body. The counterparty is implied by the original."""
    offered_items: list[int]
    requested_items: list[int]
    expiration: int


class MatchQuery(BaseModel):
    offered_items: list[int]


class ClockUpdate(BaseModel):
    block_height: int = Field(ge=0)


class SwapCreated(BaseModel):
    swap_id: int


class Acknowledgement(BaseModel):
    ok: bool = True


class SwapResponse(BaseModel):
    """Public view of a swap record."""
    id: int
    proposer: str
    counterparty: str
    offered_items: list[int]
    requested_items: list[int]
    status: str
    expiration: int
    created_at: int
    parent_id: int | None = None
    child_counter_id: int | None = None


class SwapIdList(BaseModel):
    swap_ids: list[int]


class SwapEventResponse(BaseModel):
    event: str
    swap_id: int
    block_height: int
