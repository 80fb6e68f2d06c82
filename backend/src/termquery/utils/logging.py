"""Structured logging utilities for the term query Lambda.

Log lines are JSON objects written to stdout so CloudWatch Logs Insights
can filter on ``request_id``, ``level`` and the ``extra`` payload.
"""

from __future__ import annotations

import json
import logging
import os
import sys
import traceback
from contextvars import ContextVar
from datetime import datetime
from datetime import timezone
from typing import Any
from typing import Mapping
from typing import MutableMapping
from typing import Optional

request_id: ContextVar[str] = ContextVar("request_id", default="")

_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime"}


class StructuredLogFormatter(logging.Formatter):
    """Render log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        req_id = request_id.get()
        if req_id:
            log_data["request_id"] = req_id

        if record.levelno >= logging.WARNING:
            log_data["source"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": traceback.format_exception(*record.exc_info),
            }

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        }
        if extra:
            log_data["extra"] = extra

        return json.dumps(log_data, default=str)


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that merges adapter context into ``extra``."""

    def process(
        self,
        msg: str,
        kwargs: MutableMapping[str, Any],
    ) -> tuple[str, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        if self.extra:
            for key, value in self.extra.items():
                extra.setdefault(key, value)
        kwargs["extra"] = extra
        return msg, kwargs


def configure_logging(level: Optional[str] = None) -> None:
    """Configure structured logging for Lambda execution.

    Args:
        level: Log level name. Defaults to the LOG_LEVEL environment
               variable or INFO.
    """
    log_level: str = (level or os.getenv("LOG_LEVEL") or "INFO").upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredLogFormatter())
    root_logger.addHandler(handler)

    logging.getLogger("boto3").setLevel(logging.WARNING)
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_logger(name: str, **extra: Any) -> ContextLogger:
    """Get a context-aware logger.

    Args:
        name: Logger name (typically __name__).
        **extra: Additional context to include in all log messages.
    """
    return ContextLogger(logging.getLogger(name), extra)


def set_request_context(req_id: Optional[str] = None) -> None:
    """Set the request id included in every log line of this invocation."""
    if req_id:
        request_id.set(req_id)


def clear_request_context() -> None:
    """Clear request context after a Lambda invocation."""
    request_id.set("")


def log_lambda_event(logger: ContextLogger, event: Mapping[str, Any]) -> None:
    """Log a summary of the API Gateway event at DEBUG level."""
    params = event.get("queryStringParameters") or {}
    logger.debug(
        "Lambda event received",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "query_param_names": sorted(params),
        },
    )


def log_response(
    logger: ContextLogger,
    status_code: int,
    duration_ms: Optional[float] = None,
) -> None:
    """Log the response status, at WARNING for error statuses."""
    log_data: dict[str, Any] = {"status_code": status_code}
    if duration_ms is not None:
        log_data["duration_ms"] = round(duration_ms, 2)

    level = logging.INFO if status_code < 400 else logging.WARNING
    logger.log(level, "Lambda response", extra=log_data)
