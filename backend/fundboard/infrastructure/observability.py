"""Structured Logging — one stream handler, JSON or key=value text.

Invariants:
    - Every line carries timestamp, level, logger name and message
    - Request fields passed via extra= (client_id, storage_key, shop, item_id,
      error_code, path, upstream_status) appear in both formats when set
    - Access tokens and secrets are never passed as extra fields
    - setup_logging is idempotent: calling it again replaces its own handler

Design Decisions:
    - stdlib logging with a custom formatter, no logging library
    - httpx/httpcore request lines are held to WARNING; they would log every
      shop URL the gateway calls
"""

import json
import logging
from datetime import datetime, timezone

REQUEST_FIELDS = (
    "client_id", "storage_key", "shop", "item_id",
    "error_code", "path", "upstream_status",
)
_QUIET_LOGGERS = ("httpx", "httpcore")
_HANDLER_NAME = "fundboard"


def request_fields(record: logging.LogRecord) -> dict:
    """REQUEST_FIELDS present on the record, in declaration order."""
    return {
        key: record.__dict__[key]
        for key in REQUEST_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **request_fields(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class KeyValueFormatter(logging.Formatter):
    """Human-readable line with request fields appended as key=value."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = request_fields(record)
        if not fields:
            return line
        head, sep, tail = line.partition("\n")
        pairs = " ".join(f"{k}={v}" for k, v in fields.items())
        return f"{head} [{pairs}]{sep}{tail}"


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the app's root handler, replacing one from an earlier call."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else KeyValueFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
