"""Shared response utilities for the Lambda handler."""

from __future__ import annotations

import json
from typing import Any
from typing import Optional


def get_security_headers() -> dict[str, str]:
    """Get security headers for all responses.

    SECURITY: These headers protect against common web vulnerabilities:
    - X-Content-Type-Options: Prevents MIME type sniffing
    - Cache-Control: Prevents caching of record data
    """
    return {
        "X-Content-Type-Options": "nosniff",
        "Cache-Control": "no-store, no-cache, must-revalidate",
    }


def json_response(
    status_code: int,
    body: Any,
    headers: Optional[dict[str, str]] = None,
) -> dict[str, Any]:
    """Create a JSON API Gateway proxy response.

    Args:
        status_code: HTTP status code.
        body: JSON-serializable response body.
        headers: Optional additional headers to include.
    """
    response_headers = {
        "Content-Type": "application/json",
    }
    response_headers.update(get_security_headers())
    if headers:
        response_headers.update(headers)

    return {
        "statusCode": status_code,
        "headers": response_headers,
        "body": json.dumps(body, default=str, separators=(",", ":")),
    }

