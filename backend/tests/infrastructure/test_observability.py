"""Structured logging tests: JSON formatter fields and setup."""

import json
import logging

from swapmatch.infrastructure.observability import (
    ContextTextFormatter,
    JSONFormatter,
    setup_logging,
)


def _record(**extra):
    record = logging.LogRecord(
        "swapmatch.test", logging.INFO, __file__, 1, "swap %s", (3,), None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_base_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "swapmatch.test"
    assert payload["message"] == "swap 3"
    assert "timestamp" in payload


def test_json_formatter_surfaces_swap_fields():
    payload = json.loads(JSONFormatter().format(
        _record(swap_id=3, caller="wallet_1", error_code="EXPIRED"),
    ))
    assert payload["swap_id"] == 3
    assert payload["caller"] == "wallet_1"
    assert payload["error_code"] == "EXPIRED"
    assert "event" not in payload


def test_text_formatter_appends_context():
    line = ContextTextFormatter().format(_record(swap_id=3, event="accepted"))
    assert "swapmatch.test - swap 3" in line
    assert line.endswith("swap_id=3 event=accepted")


def test_text_formatter_without_context():
    line = ContextTextFormatter().format(_record())
    assert line.endswith("swap 3")


def test_setup_logging_sets_level():
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    try:
        setup_logging("warning", "text")
        assert root.level == logging.WARNING
        assert len(root.handlers) == len(before) + 1
    finally:
        for handler in root.handlers[len(before):]:
            root.removeHandler(handler)
        root.setLevel(level)
