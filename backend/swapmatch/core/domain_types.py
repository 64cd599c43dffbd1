"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - SwapId is a positive int, assigned sequentially from 1, never reused
    - Identity and ItemRef wrap the raw values used by external collaborators
    - BlockHeight is the logical clock value (monotonic, supplied externally)
    - All valid states encoded as Enums, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

SwapId = NewType("SwapId", int)
Identity = NewType("Identity", str)
ItemRef = NewType("ItemRef", int)


# ─── Value Types ─────────────────────────────────────────────────

BlockHeight = NewType("BlockHeight", int)


# ─── Limits ──────────────────────────────────────────────────────

MAX_ITEMS_PER_SIDE = 5
MAX_COUNTER_OFFER_DEPTH = 3
MAX_EXPIRATION_WINDOW = 10_080  # ~one week at one tick per minute
MAX_USER_SWAPS = 100


# ─── Enums ───────────────────────────────────────────────────────

class SwapStatus(str, Enum):
    """Swap lifecycle states. Only PENDING has outgoing transitions
    (plus ACCEPTED -> COMPLETED)."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    COUNTERED = "countered"


class SwapEventType(str, Enum):
    """Domain events emitted after each successful transition."""
    PROPOSED = "proposed"
    ACCEPTED = "accepted"
    CANCELLED = "cancelled"
    COUNTERED = "countered"
    COMPLETED = "completed"
