"""
Logging configuration for tiercache.

Modules log through ``logging.getLogger(__name__)`` and attach context
via ``extra={...}``.  :func:`setup_logging` installs a single stream
handler on the ``tiercache`` logger that renders either classic text
lines or one JSON object per record, extra fields included.
"""

import json
import logging
import sys
from typing import Any, Dict, Optional

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render a record and its ``extra`` fields as a JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED:
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json", stream: Optional[Any] = None) -> logging.Logger:
    """Set up the ``tiercache`` logger.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ...).
        fmt: ``"json"`` for structured output, anything else for text.
        stream: Output stream; defaults to stderr so CLI output stays clean.

    Returns:
        The configured ``tiercache`` logger.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger("tiercache")
    root_logger.setLevel(numeric_level)
    root_logger.handlers = []

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(JsonFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT))
    root_logger.addHandler(handler)

    return root_logger
