"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (view_id, path, sequence, error_code) surfaced when present
    - JSON format in production, human-readable in development
    - At most one bomviz handler on the root logger

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging called once on startup via lifespan
"""

import logging
import json
from datetime import datetime, timezone

_HANDLER_MARK = "_bomviz_handler"

_EXTRA_KEYS = (
    "view_id", "path", "sequence", "status_code", "error_code",
    "node_count", "edge_count",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json", quiet_http: bool = True):
    """Configure logging for the application. Safe to call again (lifespan restarts in tests)."""
    for existing in [h for h in logging.root.handlers if getattr(h, _HANDLER_MARK, False)]:
        logging.root.removeHandler(existing)

    handler = logging.StreamHandler()
    setattr(handler, _HANDLER_MARK, True)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s — %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # httpx logs every graph fetch at INFO; the loader logs its own outcome
    if quiet_http:
        logging.getLogger("httpx").setLevel(logging.WARNING)
