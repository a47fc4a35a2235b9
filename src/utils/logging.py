"""Structured JSON logging configuration."""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Dict, Any

DEFAULT_LOG_LEVEL = "INFO"

# Third-party loggers that are too chatty at INFO
_QUIET_LOGGERS = ("uvicorn.access", "pymongo")


class JSONFormatter(logging.Formatter):
    """Render each record as one JSON line.

    Fields passed through ``extra={...}`` (``userId``, ``taskId`` ...) are
    copied to the top level of the line next to the standard fields.
    """

    _STANDARD_ATTRS = frozenset(vars(logging.LogRecord('', 0, '', 0, '', (), None))) | {
        'message', 'asctime', 'taskName',
    }

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        log_data: Dict[str, Any] = {
            "timestamp": created.isoformat(timespec='milliseconds').replace('+00:00', 'Z'),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in self._STANDARD_ATTRS and not callable(value):
                log_data[key] = value

        # default=str keeps datetimes and enums in extras from breaking the line
        return json.dumps(log_data, default=str)


def resolve_log_level(value: str | None) -> int:
    """Map a level name such as ``debug`` to its numeric value, falling back to INFO."""
    level = logging.getLevelName((value or DEFAULT_LOG_LEVEL).strip().upper())
    if isinstance(level, int):
        return level
    return logging.INFO


def setup_structured_logging(level: str | None = None) -> logging.Handler:
    """Route the root logger through a single JSON handler on stderr.

    The level comes from ``level`` or the LOG_LEVEL environment variable.
    Access logs and driver chatter are capped at WARNING.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(resolve_log_level(level or os.getenv("LOG_LEVEL")))
    root_logger.handlers = [handler]

    for name in _QUIET_LOGGERS:
        noisy = logging.getLogger(name)
        noisy.handlers = [handler]
        noisy.propagate = False
        noisy.setLevel(logging.WARNING)

    return handler
