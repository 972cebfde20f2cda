"""Logging setup for optsim.

All loggers hang off the ``optsim`` root. Output goes to stderr, and the
default level (WARNING) keeps routine events such as rejected trades off
the terminal; raise verbosity with LOG_LEVEL or ``--log-level``.

Structured fields travel on the record as ``extra_fields``; build them
with :func:`fields`::

    logger.debug("Premium drift", extra=fields(index=0, drift_pct=-3))
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

from optsim.config import get_config

ROOT_LOGGER = "optsim"


def fields(**values: Any) -> dict[str, Any]:
    """Wrap structured values for the ``extra=`` argument of a log call."""
    return {"extra_fields": values}


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with any ``extra_fields`` merged in."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(getattr(record, "extra_fields", {}))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class SimpleFormatter(logging.Formatter):
    """Human-readable ``time | level | logger | message`` lines.

    Structured fields, if present, are appended as ``key=value`` pairs.
    """

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extra = getattr(record, "extra_fields", None)
        if extra:
            line += " | " + " ".join(f"{k}={v}" for k, v in extra.items())
        return line


_initialized = False


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """Attach a single handler to the ``optsim`` logger (once).

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL. Defaults to config.
        format_type: 'json' or 'simple'. Defaults to config.
        stream: Destination stream. Defaults to stderr.
    """
    global _initialized
    if _initialized:
        return

    config = get_config().logging
    numeric_level = getattr(logging, (level or config.level).upper(), logging.WARNING)
    formatter = (
        JSONFormatter() if (format_type or config.format) == "json" else SimpleFormatter()
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    # Allow propagation for caplog capture in tests
    root_logger.propagate = True

    _initialized = True


def get_logger(name: str) -> logging.Logger:
    """Child logger under ``optsim`` (prefix added if missing)."""
    setup_logging()
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def reset_logging() -> None:
    """Drop the handler and allow setup to run again (useful for testing)."""
    global _initialized
    _initialized = False
    logging.getLogger(ROOT_LOGGER).handlers.clear()
