"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - Every line carries timestamp (from the record, not the formatter), level,
      logger name, and message
    - Request-scoped extras (user_id, post_id, error_code, path, method) and error
      metadata (category, severity, resource_id, debug_info) appear only when a
      call site passed them via `extra=`
    - setup_logging is idempotent: calling it twice does not duplicate output
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = (
    "user_id", "post_id", "error_code", "path", "method",
    "category", "severity", "resource_id", "debug_info",
)

_HANDLER_NAME = "devconnector"


class JSONFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update({
            key: record.__dict__[key]
            for key in EXTRA_FIELDS
            if record.__dict__.get(key) is not None
        })
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the app handler on the root logger (json or plain text)."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
