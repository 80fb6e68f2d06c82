"""Shared parsing utilities for request handling."""

from __future__ import annotations

from typing import Any
from typing import Mapping


def collect_query_params(event: Mapping[str, Any]) -> dict[str, str]:
    """Collect single-value query parameters from an API Gateway event.

    Keeps the order API Gateway delivered them in. Parameters without a
    value are dropped and non-string values are converted to text.

    Args:
        event: The API Gateway event dictionary.

    Returns:
        Dictionary mapping parameter names to values.
    """
    single = event.get("queryStringParameters") or {}
    params: dict[str, str] = {}
    for key, value in single.items():
        if value is None:
            continue
        params[key] = value if isinstance(value, str) else str(value)
    return params


def get_request_id(event: Mapping[str, Any]) -> str:
    """Return the API Gateway request id of an event, or an empty string."""
    request_context = event.get("requestContext") or {}
    return str(request_context.get("requestId") or "")
