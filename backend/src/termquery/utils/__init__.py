"""Utility modules for the term query handler."""

from termquery.utils.parsers import collect_query_params, get_request_id
from termquery.utils.responses import json_response
from termquery.utils.logging import (
    configure_logging,
    get_logger,
    set_request_context,
    clear_request_context,
)

__all__ = [
    "clear_request_context",
    "collect_query_params",
    "configure_logging",
    "get_logger",
    "get_request_id",
    "json_response",
    "set_request_context",
]
