"""Error Hierarchy: typed, categorized exceptions for all swap failure modes.

Invariants:
    - Every error has a code (str), result_code (int), category and severity
    - result_code values are stable: 100-112 for the contract codes, 120+ for shell errors
    - Domain errors are deterministic functions of state + input (never retryable)
    - to_response() produces the REST envelope

Design Decisions:
    - Single hierarchy with SwapMatchingError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHORIZATION = "authorization"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    swap_id: int | None = None
    caller: str | None = None
    block_height: int | None = None
    debug_info: dict[str, Any] | None = None


class SwapMatchingError(Exception):
    """Base exception for all swap matching errors."""

    def __init__(
        self,
        message: str,
        code: str,
        result_code: int,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.result_code = result_code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "result_code": self.result_code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "swap_id": self.context.swap_id,
                    "caller": self.context.caller,
                    "block_height": self.context.block_height,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class NotAuthorizedError(SwapMatchingError):
    """Caller lacks permission: unregistered identity, non-party, non-finalizer."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Not authorized: {reason}",
            "NOT_AUTHORIZED", 100, ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )
        self.reason = reason


class InvalidItemError(SwapMatchingError):
    """Item set is empty, too large, or rejected by the item catalog."""
    def __init__(self, side: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid {side} item set",
            "INVALID_ITEM", 101, ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.side = side


class SwapNotFoundError(SwapMatchingError):
    """Referenced swap id does not exist."""
    def __init__(self, swap_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"Swap {swap_id} not found",
            "SWAP_NOT_FOUND", 102, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )


class InvalidStatusError(SwapMatchingError):
    """Operation attempted against a swap not in the required source state."""
    def __init__(
        self, current: str, required: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Swap is {current}, operation requires {required}",
            "INVALID_STATUS", 103, ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.current = current
        self.required = required


class ExpiredError(SwapMatchingError):
    """Accept attempted at or after the expiration height."""
    def __init__(self, expiration: int, context: ErrorContext | None = None):
        super().__init__(
            f"Swap expired at height {expiration}",
            "EXPIRED", 104, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 409,
        )
        self.expiration = expiration


class InvalidExpirationError(SwapMatchingError):
    """Expiration outside (now, now + window]."""
    def __init__(
        self, expiration: int, now: int, window: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Expiration {expiration} must be in ({now}, {now + window}]",
            "INVALID_EXPIRATION", 105, ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.expiration = expiration


class NotProposedToError(SwapMatchingError):
    """Accept or counter-offer by someone other than the counterparty."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Only the counterparty may respond to this swap",
            "NOT_PROPOSED_TO", 107, ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class SelfSwapError(SwapMatchingError):
    """Proposer and counterparty are the same identity."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Cannot propose a swap to yourself",
            "SELF_SWAP", 108, ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class CounterOfferExistsError(SwapMatchingError):
    """Swap already countered, or counter-offer depth ceiling reached."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            reason,
            "COUNTER_OFFER_EXISTS", 112, ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


# ─── Shell Errors ───────────────────────────────────────────────

class ClockRegressionError(SwapMatchingError):
    """Logical clock asked to move backwards."""
    def __init__(self, current: int, requested: int, context: ErrorContext | None = None):
        super().__init__(
            f"Block height cannot decrease ({current} -> {requested})",
            "CLOCK_REGRESSION", 120, ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
