"""Pytest configuration and fixtures for backend tests.

This module provides shared fixtures for testing the term query handler,
including schemas, API Gateway events and gateway test doubles.
"""

from __future__ import annotations

import io
import json
import sys
from pathlib import Path
from typing import Any
from uuid import uuid4

import pytest

# Add backend source to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / 'backend' / 'src'))


# --- Schema Fixtures ---


@pytest.fixture
def schema_document() -> dict:
    """Small schema document covering root fields and relations."""
    return {
        'type': 'object',
        'properties': {
            'id': {'title': 'Term__c.Id', 'type': 'string'},
            'status': {'title': 'Term__c.Status__c', 'type': 'string'},
            'termNumber': {'title': 'Term__c.Term_Number__c', 'type': 'number'},
            'ownerName': {'title': 'Term__c.Owner.Name', 'type': 'string'},
        },
    }


@pytest.fixture
def term_schema(schema_document):
    """TermSchema built from the sample document."""
    from termquery.schema import parse_schema

    return parse_schema(schema_document)


# --- API Event Fixtures ---


@pytest.fixture
def api_gateway_event() -> dict:
    """Base API Gateway event structure."""
    return {
        'httpMethod': 'GET',
        'path': '/v1/terms',
        'queryStringParameters': None,
        'multiValueQueryStringParameters': None,
        'headers': {},
        'requestContext': {
            'requestId': str(uuid4()),
        },
        'body': None,
        'isBase64Encoded': False,
    }


# --- Mock Fixtures ---


@pytest.fixture
def mock_boto3_client(mocker):
    """Mock boto3 client for AWS service calls."""
    mock = mocker.patch('boto3.client')
    return mock


# --- Gateway Fixtures ---


class FakeGateway:
    """Query gateway test double that records every SOQL string."""

    def __init__(self, payload: Any = None, error: Exception | None = None) -> None:
        self.payload = payload
        self.error = error
        self.calls: list[str] = []

    def execute(self, soql: str) -> Any:
        self.calls.append(soql)
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def fake_gateway() -> FakeGateway:
    """Gateway that returns an empty query result."""
    return FakeGateway(payload={'totalSize': 0, 'done': True, 'records': []})


def make_invoke_response(
    payload: Any,
    status_code: int = 200,
    function_error: str | None = None,
) -> dict:
    """Build a boto3 Lambda ``invoke`` response."""
    raw = payload if isinstance(payload, bytes) else json.dumps(payload).encode()
    response = {
        'StatusCode': status_code,
        'Payload': io.BytesIO(raw),
    }
    if function_error:
        response['FunctionError'] = function_error
    return response
