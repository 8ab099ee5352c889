"""
Structured logging configuration.
JSON lines in production, a readable single-line format when debugging.
"""
import json
import logging
import sys
from typing import Optional

# Evaluation context attached through `extra=` and copied into JSON output
CONTEXT_FIELDS = ("flag", "user", "cache_key")

DEBUG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (field, getattr(record, field))
            for field in CONTEXT_FIELDS
            if hasattr(record, field)
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def configure_logging(debug: bool = False, level: Optional[str] = None) -> None:
    """
    Install a stdout handler on the root logger.

    Args:
        debug: Use the readable format and default to DEBUG level
        level: Explicit level name, overrides the debug default
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(DEBUG_FORMAT) if debug else JsonFormatter())

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(level or ("DEBUG" if debug else "INFO"))

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").handlers = [handler]
