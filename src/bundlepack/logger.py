"""
Logging setup for bundlepack.

Modules log through ``logging.getLogger(__name__)``; this module installs the
single handler on the ``bundlepack`` logger, either as plain console text or
as JSON lines for log shipping.

Usage:
    from bundlepack.logger import configure_logging

    configure_logging(level="debug", fmt="json")
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any, Dict, Optional

ROOT_LOGGER = "bundlepack"

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime"}

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class JsonLogFormatter(logging.Formatter):
    """One JSON object per record, with ``extra`` fields merged in."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS and not key.startswith("_"):
                entry[key] = value
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class _BundlePackHandler(logging.StreamHandler):
    """Marker type so configure_logging can replace its own handler."""


def configure_logging(
    level: str = "info",
    fmt: str = "text",
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """
    Configure the ``bundlepack`` logger.

    Args:
        level: debug, info, warning or error
        fmt: "text" for ``[LEVEL] message`` lines, "json" for JSON lines
        stream: Output stream (defaults to stderr)

    Returns:
        The configured ``bundlepack`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(_LEVELS.get(level.lower(), logging.INFO))

    for handler in list(logger.handlers):
        if isinstance(handler, _BundlePackHandler):
            logger.removeHandler(handler)

    handler = _BundlePackHandler(stream or sys.stderr)
    if fmt == "json":
        handler.setFormatter(JsonLogFormatter())
    else:
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    logger.addHandler(handler)

    return logger
