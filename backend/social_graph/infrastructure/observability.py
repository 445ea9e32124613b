"""Structured Logging — one JSON object per line, with relationship context fields.

Invariants:
    - Every line carries timestamp, level, logger, service and message
    - Context fields (public_id, target_id, error_code, path, operation, variant)
      appear only when the call site passed them via `extra=`
    - setup_logging is re-entrant: a second call swaps the handler, never stacks one

Design Decisions:
    - Stdlib logging + a small JSONFormatter instead of a logging library: call
      sites stay plain `logger.info(msg, extra={...})`
    - SQLAlchemy engine logging capped at WARNING: statement echo belongs in
      local debugging, not in service logs
"""

import json
import logging
from datetime import datetime, timezone

SERVICE_NAME = "social-graph-api"

CONTEXT_FIELDS = (
    "public_id", "target_id", "error_code", "path", "operation", "variant",
)


class JSONFormatter(logging.Formatter):

    def __init__(self, service: str = SERVICE_NAME):
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": self.service,
            "message": record.getMessage(),
        }
        entry.update(
            (field, record.__dict__[field])
            for field in CONTEXT_FIELDS
            if record.__dict__.get(field) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


_handler: logging.Handler | None = None


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the root handler (json or text) at the given level."""
    global _handler
    handler = logging.StreamHandler()
    handler.setFormatter(
        JSONFormatter() if fmt == "json"
        else logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s"),
    )
    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    _handler = handler
