"""Logging helpers for applications that log annotated errors.

The library itself only emits a few diagnostic events on its own loggers.
This module offers the pieces an application needs to surface error
annotations in its logs:
- ErrorContextFilter to attach kind, user message and origin trace
- JSON formatter for machine-friendly logs
- configure_logging() wiring both onto a stdout handler on the weberr logger
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from logging import LogRecord
from typing import Any

from weberr.core.capabilities import get_stack_trace, get_type, get_user_message
from weberr.core.config import LogSettings, settings

PACKAGE_LOGGER = "weberr"

# Set on handlers installed by configure_logging()
_INSTALLED_MARK = "_weberr_configured"

# Logging fields we intentionally exclude from extra payload capture
_EXCLUDED_ATTRS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
    "message",
    "asctime",
}


def _extra_fields(record: LogRecord) -> dict[str, Any]:
    """Collect the non-standard attributes of a record.

    Args:
        record: LogRecord instance to inspect.

    Returns:
        Dict of fields passed through ``extra`` or added by filters.
    """

    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _EXCLUDED_ATTRS and not key.startswith("_")
    }


def _default_timestamp() -> str:
    """Generate an ISO-8601 UTC timestamp string."""

    return datetime.now(timezone.utc).isoformat()


class ErrorContextFilter(logging.Filter):
    """Attach error annotations from ``exc_info`` to the record.

    Adds ``error_kind``, ``user_message`` and, unless disabled,
    ``stack_trace`` (the origin trace of the chain).
    """

    def __init__(self, include_stack: bool = True) -> None:
        super().__init__()
        self.include_stack = include_stack

    def filter(self, record: LogRecord) -> bool:  # noqa: D401
        if not record.exc_info:
            return True
        err = record.exc_info[1]
        if err is None:
            return True

        record.error_kind = get_type(err).name
        record.user_message = get_user_message(err)
        if self.include_stack:
            record.stack_trace = get_stack_trace(err)
        return True


class JsonFormatter(logging.Formatter):
    """Format LogRecord as a single JSON object."""

    def __init__(self, *, ensure_ascii: bool = True) -> None:
        super().__init__()
        self.ensure_ascii = ensure_ascii

    def format(self, record: LogRecord) -> str:  # noqa: D401
        record_data = {
            "timestamp": _default_timestamp(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        record_data.update(_extra_fields(record))

        return json.dumps(record_data, default=str, ensure_ascii=self.ensure_ascii)


def configure_logging(log_settings: LogSettings | None = None) -> logging.Handler:
    """Configure the ``weberr`` logger with error context and formatting.

    Handlers on the root logger and on application loggers are left alone.
    Calling it again replaces the handler installed by the previous call.

    Args:
        log_settings: Optional log settings; defaults to global settings if omitted.

    Returns:
        The installed handler, so callers can remove it again.
    """

    cfg = log_settings or settings.log

    level = getattr(logging, cfg.level.upper(), logging.WARNING)
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(ErrorContextFilter())

    if cfg.format == "plain":
        formatter: logging.Formatter = logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s"
        )
    else:
        formatter = JsonFormatter()

    handler.setFormatter(formatter)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in package_logger.handlers[:]:
        if getattr(existing, _INSTALLED_MARK, False):
            package_logger.removeHandler(existing)
    setattr(handler, _INSTALLED_MARK, True)
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return handler
