"""Ledger Routes: logical clock and recent swap events.

Invariants:
    - PUT /clock only moves the block height forward (409 CLOCK_REGRESSION otherwise)
    - GET /events is read-only; events are never consumed or acknowledged

Design Decisions:
    - Clock exposed over HTTP: the hosting chain/indexer pushes heights in,
      the registry never advances it
"""

import logging

from fastapi import APIRouter, Query

from swapmatch.api.dependencies import Services
from swapmatch.schemas.swap import ClockUpdate, SwapEventResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["ledger"])


@router.get("/clock")
def get_clock(services: Services):
    return {"block_height": services.clock.now()}


@router.put("/clock")
def advance_clock(body: ClockUpdate, services: Services):
    height = services.clock.advance_to(body.block_height)
    logger.info(
        f"Block height advanced to {height}", extra={"block_height": height},
    )
    return {"block_height": height}


@router.get("/events", response_model=list[SwapEventResponse])
def list_events(
    services: Services, limit: int = Query(100, ge=1, le=1000),
):
    """Most recent events, oldest first."""
    return [
        SwapEventResponse(**e.to_dict())
        for e in services.event_log.recent(limit)
    ]
