"""Error Hierarchy: codes, categories and REST envelope."""

import pytest

from swapmatch.core.errors import (
    ClockRegressionError,
    CounterOfferExistsError,
    ErrorCategory,
    ErrorContext,
    ExpiredError,
    InvalidExpirationError,
    InvalidItemError,
    InvalidStatusError,
    NotAuthorizedError,
    NotProposedToError,
    SelfSwapError,
    SwapMatchingError,
    SwapNotFoundError,
)


@pytest.mark.parametrize("error, code, result_code, http_status", [
    (NotAuthorizedError("x"), "NOT_AUTHORIZED", 100, 403),
    (InvalidItemError("offered"), "INVALID_ITEM", 101, 400),
    (SwapNotFoundError(1), "SWAP_NOT_FOUND", 102, 404),
    (InvalidStatusError("accepted", "pending"), "INVALID_STATUS", 103, 409),
    (ExpiredError(1100), "EXPIRED", 104, 409),
    (InvalidExpirationError(1, 1000, 10_080), "INVALID_EXPIRATION", 105, 400),
    (NotProposedToError(), "NOT_PROPOSED_TO", 107, 403),
    (SelfSwapError(), "SELF_SWAP", 108, 400),
    (CounterOfferExistsError("x"), "COUNTER_OFFER_EXISTS", 112, 409),
    (ClockRegressionError(5, 4), "CLOCK_REGRESSION", 120, 409),
])
def test_error_codes(error, code, result_code, http_status):
    assert isinstance(error, SwapMatchingError)
    assert error.code == code
    assert error.result_code == result_code
    assert error.http_status == http_status


def test_to_response_envelope():
    ctx = ErrorContext(swap_id=3, caller="wallet_2", block_height=1200)
    body = ExpiredError(1100, ctx).to_response()["error"]
    assert body["code"] == "EXPIRED"
    assert body["result_code"] == 104
    assert body["category"] == ErrorCategory.BUSINESS_RULE.value
    assert body["severity"] == "warning"
    assert body["context"] == {
        "swap_id": 3, "caller": "wallet_2", "block_height": 1200,
    }
    assert "1100" in body["message"]


def test_default_context_has_timestamp():
    error = SelfSwapError()
    assert error.context.timestamp is not None
    assert error.context.swap_id is None


def test_errors_are_exceptions():
    with pytest.raises(SwapMatchingError, match="Swap 9 not found"):
        raise SwapNotFoundError(9)
