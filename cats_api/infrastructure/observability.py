"""Structured Logging — JSON and key=value formatters plus one-call setup.

Invariants:
    - Every record carries timestamp, level, logger name and message
    - Known extras (cat_id, operation, error_code, path, status_code...)
      are emitted only when set on the record
    - setup_logging() owns at most one root handler at a time

Design Decisions:
    - stdlib logging with our own formatters, no structlog/loguru
    - setup_logging called from the app lifespan, tests may call it repeatedly
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = (
    "cat_id", "operation", "error_code", "method", "path",
    "status_code", "duration_ms", "count",
)

_HANDLER_MARK = "_cats_api"


def _extras(record: logging.LogRecord) -> dict[str, object]:
    return {
        key: record.__dict__[key]
        for key in EXTRA_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_extras(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class KeyValueFormatter(logging.Formatter):
    """Human-readable line with extras appended as key=value pairs."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        pairs = " ".join(f"{k}={v}" for k, v in _extras(record).items())
        if not pairs:
            return line
        head, sep, trace = line.partition("\n")
        return f"{head} [{pairs}]{sep}{trace}"


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Point the root logger at stderr with the chosen format.

    A handler installed by an earlier call is replaced, not stacked.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else KeyValueFormatter())
    setattr(handler, _HANDLER_MARK, True)

    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, _HANDLER_MARK, False):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
