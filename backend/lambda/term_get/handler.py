"""Lambda entrypoint for term queries."""

from __future__ import annotations

from typing import Any
from typing import Mapping

from termquery.api.terms import lambda_handler as _handler


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """Delegate to the term query handler."""

    return _handler(event, context)
