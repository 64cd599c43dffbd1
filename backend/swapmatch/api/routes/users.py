"""User Routes: per-identity swap index and match lookup."""

from fastapi import APIRouter

from swapmatch.api.dependencies import Registry
from swapmatch.core.domain_types import Identity, ItemRef
from swapmatch.schemas.swap import MatchQuery, SwapIdList

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("/{user}/swaps", response_model=SwapIdList)
def get_user_swaps(user: str, registry: Registry):
    """Swap ids the user is party to, oldest first (last 100 kept)."""
    return SwapIdList(swap_ids=registry.get_user_swaps(Identity(user)))


@router.post("/{user}/matches", response_model=SwapIdList)
def find_potential_matches(user: str, body: MatchQuery, registry: Registry):
    matches = registry.find_potential_matches(
        Identity(user), [ItemRef(i) for i in body.offered_items],
    )
    return SwapIdList(swap_ids=matches)
