"""Collaborator tests: placeholder capabilities, manual clock, event log."""

import pytest

from swapmatch.core.domain_types import SwapEventType
from swapmatch.core.errors import ClockRegressionError
from swapmatch.core.swap_state import SwapEvent
from swapmatch.infrastructure.collaborators import (
    InMemoryEventLog,
    ManualClock,
    OpenIdentityDirectory,
    OpenItemCatalog,
)


def test_open_directory_accepts_any_non_empty_identity():
    directory = OpenIdentityDirectory()
    assert directory.is_registered_identity("wallet_1")
    assert not directory.is_registered_identity("")


def test_open_catalog_accepts_everything():
    assert OpenItemCatalog().is_valid_item_set([1, 2], "wallet_1")


# --- ManualClock --------------------------------------------------------------

def test_clock_starts_at_given_height():
    assert ManualClock(1000).now() == 1000


def test_clock_advances():
    clock = ManualClock(1000)
    assert clock.advance_to(1200) == 1200
    assert clock.now() == 1200


def test_clock_allows_same_height():
    clock = ManualClock(1000)
    assert clock.advance_to(1000) == 1000


def test_clock_never_moves_backwards():
    clock = ManualClock(1000)
    with pytest.raises(ClockRegressionError):
        clock.advance_to(999)
    assert clock.now() == 1000


def test_clock_rejects_negative_start():
    with pytest.raises(ValueError):
        ManualClock(-1)


# --- InMemoryEventLog ---------------------------------------------------------

def _event(swap_id):
    return SwapEvent(SwapEventType.PROPOSED, swap_id, 1000)


def test_event_log_records_in_order():
    log = InMemoryEventLog()
    log.emit(_event(1))
    log.emit(_event(2))
    assert [e.swap_id for e in log.recent()] == [1, 2]
    assert len(log) == 2


def test_event_log_is_bounded():
    log = InMemoryEventLog(capacity=2)
    for i in range(1, 5):
        log.emit(_event(i))
    assert [e.swap_id for e in log.recent()] == [3, 4]


def test_event_log_limit_returns_newest():
    log = InMemoryEventLog()
    for i in range(1, 6):
        log.emit(_event(i))
    assert [e.swap_id for e in log.recent(2)] == [4, 5]
    assert log.recent(0) == []


def test_event_log_writes_application_log(caplog):
    caplog.set_level("INFO", logger="swapmatch.infrastructure.collaborators")
    InMemoryEventLog().emit(_event(7))
    record = caplog.records[-1]
    assert record.event == "proposed"
    assert record.swap_id == 7
