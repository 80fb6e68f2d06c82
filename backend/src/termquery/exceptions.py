"""Custom exception classes for the term query handler.

Each exception carries the HTTP status code it maps to and an optional
detail string that is surfaced in the error envelope.
"""

from __future__ import annotations

from typing import Any
from typing import Optional


class AppError(Exception):
    """Base exception for application errors.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code (default 500).
        detail: Optional additional context.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        detail: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response body."""
        result: dict[str, Any] = {"error": self.message}
        if self.detail:
            result["detail"] = self.detail
        return result


class ConfigurationError(AppError):
    """Raised when required configuration is missing.

    Use when environment variables are not set for the Lambda.
    """

    def __init__(self, config_name: str):
        super().__init__(
            f"Missing required configuration: {config_name}",
            status_code=500,
        )
        self.config_name = config_name


class SchemaError(AppError):
    """Raised when the field schema document is malformed.

    Raised at load time, before any request is served.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        detail = f"Field: {field}" if field else None
        super().__init__(message, status_code=500, detail=detail)
        self.field = field


class UpstreamError(AppError):
    """Raised when the query Lambda invocation fails.

    The message of the underlying failure is kept as ``detail`` so the
    caller sees why the upstream call failed.
    """

    def __init__(
        self,
        detail: str,
        message: str = "Upstream Lambda invoke failed",
    ):
        super().__init__(message, status_code=502, detail=detail)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response body, always with ``detail``."""
        return {"error": self.message, "detail": self.detail or ""}
