"""Client for the Salesforce query Lambda.

The query Lambda accepts ``{"soql": "..."}`` and answers with the
Salesforce query result, ``{"totalSize": n, "done": true, "records": [...]}``.
This module only invokes it; it never inspects the SOQL.

Environment:
    SF_QUERY_LAMBDA_NAME  name or ARN of the query Lambda
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from typing import Any
from typing import Protocol

import boto3
from botocore.exceptions import BotoCoreError
from botocore.exceptions import ClientError

from termquery.exceptions import ConfigurationError
from termquery.exceptions import UpstreamError
from termquery.utils.logging import get_logger

logger = get_logger(__name__)

FUNCTION_NAME_ENV_VAR = "SF_QUERY_LAMBDA_NAME"


@lru_cache(maxsize=1)
def get_lambda_client() -> Any:
    """Return the Lambda client shared by warm invocations."""
    return boto3.client("lambda")


class QueryGateway(Protocol):
    """Executes a SOQL string and returns the decoded result payload."""

    def execute(self, soql: str) -> Any: ...


class LambdaQueryGateway:
    """Runs SOQL through the query Lambda with a synchronous invoke."""

    def __init__(self, function_name: str, client: Any = None) -> None:
        if not function_name:
            raise ConfigurationError(FUNCTION_NAME_ENV_VAR)
        self.function_name = function_name
        self._client = client

    @classmethod
    def from_env(cls, client: Any = None) -> "LambdaQueryGateway":
        """Create a gateway for the function named in the environment."""
        return cls(os.getenv(FUNCTION_NAME_ENV_VAR, ""), client=client)

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = get_lambda_client()
        return self._client

    def execute(self, soql: str) -> Any:
        """Invoke the query Lambda and return its decoded payload.

        Raises:
            UpstreamError: If the invoke fails, the function reports an
                error, or the payload is not JSON.
        """
        try:
            resp = self.client.invoke(
                FunctionName=self.function_name,
                InvocationType="RequestResponse",
                Payload=json.dumps({"soql": soql}).encode(),
            )
        except (ClientError, BotoCoreError) as exc:
            raise UpstreamError(_error_message(exc)) from exc

        status = resp.get("StatusCode", 200)
        if not 200 <= status < 300:
            raise UpstreamError(f"Lambda invoke returned status {status}")

        raw = resp["Payload"].read()
        if resp.get("FunctionError"):
            raise UpstreamError(f"{resp['FunctionError']}: {_decode(raw)}")

        try:
            return json.loads(raw)
        except (TypeError, ValueError) as exc:
            raise UpstreamError(f"Malformed Lambda response: {exc}") from exc


def extract_records(payload: Any) -> list[Any]:
    """Return the ``records`` list of a query payload, or an empty list."""

    if not isinstance(payload, dict):
        return []
    records = payload.get("records")
    if not isinstance(records, list):
        logger.warning("Query payload has no records list; returning no records")
        return []
    return records


def _error_message(exc: Exception) -> str:
    message = str(exc)
    return message or type(exc).__name__


def _decode(raw: Any) -> str:
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return str(raw)
