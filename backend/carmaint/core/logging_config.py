"""
Structured logging setup.

Every log line is one JSON object on stdout. Request middleware attaches
the request context (path, method, status, latency, correlation ID and
principal) through ``extra``; the formatter promotes those fields to the
top level alongside any other extras.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional


# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED_ATTRS = frozenset([
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "message", "pathname", "process", "processName", "relativeCreated",
    "thread", "threadName", "exc_info", "exc_text", "stack_info",
    "taskName",
])

# Third-party loggers that are too chatty at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "asyncio", "aiosqlite", "sqlalchemy.engine")

PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class JSONFormatter(logging.Formatter):
    """
    Render a LogRecord as a single-line JSON object.

    Fixed keys: ``timestamp`` (UTC, ISO 8601), ``level``, ``message``,
    ``logger``, plus ``exception`` when the record has exc_info. Request
    context fields come next, then any remaining extras. Values that are
    not JSON-serializable are written with ``str()``.

    Example output:
        {"timestamp": "2025-11-24T10:30:00.123456+00:00", "level": "INFO",
         "message": "Request completed", "logger": "carmaint.middleware.logging",
         "path": "/maintenance", "status_code": 200, "latency_ms": 12.5}
    """

    CONTEXT_FIELDS = (
        "path",
        "method",
        "status_code",
        "latency_ms",
        "request_id",
        "principal",
    )

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack_info"] = self.formatStack(record.stack_info)

        for name in self.CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = value

        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and key not in entry
        }
        entry.update(extras)

        return json.dumps(entry, default=str)


def setup_logging(level: str = "INFO", json_format: bool = True) -> None:
    """
    Install a single stdout handler on the root logger.

    Existing root handlers are removed first, so calling this again
    reconfigures rather than duplicates output.

    Args:
        level: Root level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: JSON lines when True, plain text for local debugging
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(numeric_level)
    for existing in list(root.handlers):
        root.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(
        JSONFormatter() if json_format
        else logging.Formatter(fmt=PLAIN_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    )
    root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` (normally the caller's ``__name__``)."""
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    request_id: Optional[str] = None,
    principal: Optional[str] = None,
    path: Optional[str] = None,
    method: Optional[str] = None,
    status_code: Optional[int] = None,
    latency_ms: Optional[float] = None,
    **extra_fields: Any
) -> None:
    """
    Log ``message`` at ``level`` with request context attached.

    Context arguments left as None are not added to the record.

    Example:
        log_with_context(
            logger,
            "warning",
            "Access denied",
            request_id="abc-123",
            path="/maintenance",
            status_code=401,
        )
    """
    context = {
        "request_id": request_id,
        "principal": principal,
        "path": path,
        "method": method,
        "status_code": status_code,
        "latency_ms": latency_ms,
    }
    extra = {key: value for key, value in context.items() if value is not None}
    extra.update(extra_fields)

    getattr(logger, level.lower())(message, extra=extra)
