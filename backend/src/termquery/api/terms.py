"""Lambda handler for term queries.

Translates API Gateway query parameters into SOQL against ``Term__c``,
runs it through the Salesforce query Lambda and returns the records
flattened to the field names of the term schema.
"""

from __future__ import annotations

import time
from typing import Any
from typing import Mapping
from typing import Optional

from termquery.exceptions import AppError
from termquery.exceptions import UpstreamError
from termquery.projection import project_records
from termquery.schema import TermSchema
from termquery.schema import get_term_schema
from termquery.services.sf_query import LambdaQueryGateway
from termquery.services.sf_query import QueryGateway
from termquery.services.sf_query import extract_records
from termquery.soql import build_query
from termquery.utils import collect_query_params
from termquery.utils import get_request_id
from termquery.utils import json_response
from termquery.utils.logging import clear_request_context
from termquery.utils.logging import configure_logging
from termquery.utils.logging import get_logger
from termquery.utils.logging import log_lambda_event
from termquery.utils.logging import log_response
from termquery.utils.logging import set_request_context

# Configure logging on module load
configure_logging()
logger = get_logger(__name__)


class TermQueryHandler:
    """Runs one term query per request against an injected gateway."""

    def __init__(self, schema: TermSchema, gateway: QueryGateway) -> None:
        self.schema = schema
        self.gateway = gateway

    def handle(self, event: Mapping[str, Any]) -> dict[str, Any]:
        """Handle an API Gateway request and return the proxy response."""

        started = time.perf_counter()
        set_request_context(req_id=get_request_id(event))
        try:
            response = self._handle(event)
            log_response(
                logger,
                response["statusCode"],
                duration_ms=(time.perf_counter() - started) * 1000,
            )
            return response
        finally:
            clear_request_context()

    def _handle(self, event: Mapping[str, Any]) -> dict[str, Any]:
        log_lambda_event(logger, event)

        params = collect_query_params(event)
        soql = build_query(self.schema, params)
        logger.info("Built SOQL", extra={"soql": soql})

        try:
            payload = self.gateway.execute(soql)
        except Exception as exc:
            logger.exception("Error invoking query Lambda")
            upstream = (
                exc
                if isinstance(exc, UpstreamError)
                else UpstreamError(str(exc) or type(exc).__name__)
            )
            return json_response(upstream.status_code, upstream.to_dict())

        records = project_records(self.schema, extract_records(payload))
        logger.info(
            f"Term query completed: {len(records)} records",
            extra={"count": len(records)},
        )
        return json_response(200, records)


_default_handler: Optional[TermQueryHandler] = None


def get_default_handler() -> TermQueryHandler:
    """Return the handler for this container, building it on first use."""

    global _default_handler
    if _default_handler is None:
        _default_handler = TermQueryHandler(
            schema=get_term_schema(),
            gateway=LambdaQueryGateway.from_env(),
        )
    return _default_handler


def reset_default_handler() -> None:
    """Drop the cached handler (useful in tests)."""

    global _default_handler
    _default_handler = None


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """Handle API Gateway request for term queries."""

    try:
        handler = get_default_handler()
    except AppError as exc:
        logger.exception("Term query handler is misconfigured")
        return json_response(exc.status_code, exc.to_dict())
    return handler.handle(event)
