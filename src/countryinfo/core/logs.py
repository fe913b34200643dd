"""Log helpers shared by the request path and the push adapters."""

import logging
from typing import Any

from countryinfo.core.models import LogEntry

# Standard LogRecord attributes that should not be treated as extra fields
STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)

# Extra key carrying push-backend stream labels rather than log metadata
LABELS_ATTR = "labels"


def level_for_status(status_code: int) -> int:
    """Map an HTTP status code to a logging level.

    - 200-299 (2xx) → INFO
    - 400-499 (4xx) → WARNING
    - 500-599 (5xx) → ERROR
    - Other → INFO
    """
    if 200 <= status_code < 300:
        return logging.INFO
    if 400 <= status_code < 500:
        return logging.WARNING
    if 500 <= status_code < 600:
        return logging.ERROR
    return logging.INFO


def record_extras(record: logging.LogRecord) -> dict[str, Any]:
    """Return the ``extra=`` fields attached to a log record."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in STANDARD_LOGRECORD_ATTRS
        and key != LABELS_ATTR
        and not key.startswith("_")
    }


def record_labels(record: logging.LogRecord) -> dict[str, str]:
    """Return the stream labels attached to a log record, if any."""
    labels = getattr(record, LABELS_ATTR, None)
    if not isinstance(labels, dict):
        return {}
    return {str(key): str(value) for key, value in labels.items()}


def entry_from_record(record: logging.LogRecord) -> LogEntry:
    """Convert a log record into a LogEntry.

    Exception info, when present, is flattened into ``error`` and ``stack``
    attributes.
    """
    attributes: dict[str, object] = record_extras(record)
    if record.exc_info and record.exc_info[1] is not None:
        attributes["error"] = str(record.exc_info[1])
        attributes["stack"] = logging.Formatter().formatException(record.exc_info)
    return LogEntry(
        timestamp=record.created,
        level=record.levelname.lower(),
        message=record.getMessage(),
        attributes=attributes,
    )


def log_exception(
    logger: logging.Logger, message: str, **attributes: Any
) -> None:
    """Log the active exception with its traceback at ERROR level."""
    logger.error(message, exc_info=True, extra=attributes, stacklevel=2)
