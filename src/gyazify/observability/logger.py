"""Structured JSON logger for gyazify.

Every log record is emitted as a single-line JSON object so it can be
consumed by log aggregation pipelines without additional parsing::

    {"ts": "2026-01-01T12:00:00.123456+00:00", "level": "INFO",
     "logger": "gyazify.client", "message": "upload_image complete",
     "op": "upload_image", "image_id": "abc123", "duration_ms": 41.2}

Structured fields are passed as ``extra={"extra_fields": {...}}`` and run
through :func:`gyazify.utils.redact` before they are serialised, so image
bytes and credentials never reach the log stream.

Usage::

    from gyazify.observability import get_logger

    log = get_logger("gyazify.client")
    log.info("image deleted", extra={"extra_fields": {"image_id": "abc"}})
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from gyazify.utils.redact import redact


class StructuredFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    Guaranteed keys: ``ts`` (ISO-8601 UTC), ``level``, ``logger`` and
    ``message``.  Redacted ``extra_fields`` are merged at the top level and
    ``exception`` is added when the record carries exception info.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra_fields: dict[str, Any] | None = getattr(record, "extra_fields", None)
        if extra_fields:
            log_entry.update(redact(extra_fields))

        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        if record.stack_info:
            log_entry["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(log_entry, default=str)


# One handler per logger name so that ``get_logger`` is idempotent.
_configured_loggers: set[str] = set()


def get_logger(
    name: str = "gyazify",
    *,
    level: int | str = logging.WARNING,
    stream: Any | None = None,
) -> logging.Logger:
    """Get or create a structured JSON logger.

    Parameters
    ----------
    name:
        Logger name.  Defaults to ``"gyazify"``.
    level:
        Minimum log level, as an ``int`` or a case-insensitive name.  The
        default keeps a library quiet; raise it with
        ``get_logger("gyazify.client").setLevel("INFO")``.
    stream:
        Output stream for the handler.  Defaults to ``sys.stderr``.

    Returns
    -------
    logging.Logger
        The logger, with a :class:`StructuredFormatter` handler attached
        exactly once per *name*.
    """
    logger = logging.getLogger(name)

    if name not in _configured_loggers:
        resolved_level = (
            logging.getLevelName(level.upper())
            if isinstance(level, str)
            else level
        )
        logger.setLevel(resolved_level)

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.propagate = False

        _configured_loggers.add(name)

    return logger
