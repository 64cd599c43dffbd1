"""Structured Logging: JSON and key=value formatters for swap observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Swap context (swap_id, caller, event, error_code, block_height) surfaced when present
    - JSON format in production, human-readable text with the same context in development

Design Decisions:
    - setup_logging called once on startup via lifespan
    - Timestamps taken from record.created, not format time
"""

import logging
import json
from datetime import datetime, timezone

CONTEXT_FIELDS = (
    "swap_id", "caller", "event", "error_code", "block_height", "path",
)


def _context(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in CONTEXT_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class ContextTextFormatter(logging.Formatter):
    """Plain text with swap context appended as key=value pairs."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s - %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _context(record)
        if context:
            line += " " + " ".join(f"{k}={v}" for k, v in context.items())
        return line


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure root logging for the application."""
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else ContextTextFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
