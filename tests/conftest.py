"""
Pytest Configuration and Shared Fixtures.

This module provides common fixtures for all tests:

- settings: Settings with test values (no .env file)
- graphql_stub: In-process GraphQL backend on httpx.MockTransport
- gateway: GraphQLGateway wired to the stub
- manager / customer: Session users
- sample_* : API-shaped entity payloads
"""

import json
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

import httpx
import pytest

from manager_portal.config.settings import Settings
from manager_portal.graphql.gateway import GraphQLGateway, operation_name_of
from manager_portal.models.entities import SessionUser
from tests.factories import complaint_payload, review_payload

GRAPHQL_URL = "http://graphql.test/api/graphql"

StubResponse = Union[dict, httpx.Response, Callable[[dict], Union[dict, httpx.Response]]]


@dataclass
class RecordedCall:
    operation: Optional[str]
    variables: Optional[dict[str, Any]]
    request: httpx.Request


class GraphQLStub:
    """Answers GraphQL requests by operation name and records every call."""

    def __init__(self):
        self.handlers: dict[str, StubResponse] = {}
        self.calls: list[RecordedCall] = []

    def on(self, operation: str, response: StubResponse) -> None:
        self.handlers[operation] = response

    @property
    def operations(self) -> list[Optional[str]]:
        return [call.operation for call in self.calls]

    def calls_to(self, operation: str) -> list[RecordedCall]:
        return [call for call in self.calls if call.operation == operation]

    def reset_calls(self) -> None:
        self.calls.clear()

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.headers.get("content-type", "").startswith("multipart/"):
            operation = request.headers.get("x-apollo-operation-name")
            variables = None
        else:
            body = json.loads(request.content)
            operation = operation_name_of(body["query"])
            variables = body.get("variables")

        self.calls.append(RecordedCall(operation, variables, request))

        handler = self.handlers.get(operation or "")
        if handler is None:
            return httpx.Response(200, json={"errors": [{"message": f"No stub for {operation}"}]})
        if callable(handler):
            handler = handler(variables or {})
        if isinstance(handler, httpx.Response):
            return handler
        return httpx.Response(200, json=handler)


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings with test values; ignores any local .env file."""
    return Settings(
        _env_file=None,
        graphql_api_url=GRAPHQL_URL,
        session_secret="test-session-secret-which-is-long-enough",
        upload_api_token="test-upload-token",
        upload_dir=tmp_path / "images",
        app_env="development",
        debug=False,
    )


@pytest.fixture
def graphql_stub() -> GraphQLStub:
    return GraphQLStub()


@pytest.fixture
def gateway(graphql_stub) -> GraphQLGateway:
    """Gateway whose HTTP client talks to the in-process stub."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(graphql_stub))
    return GraphQLGateway(GRAPHQL_URL, client=client)


@pytest.fixture
def manager() -> SessionUser:
    return SessionUser(id="user-1", name="Morgan Manager", email="morgan@example.com", role="manager")


@pytest.fixture
def customer() -> SessionUser:
    return SessionUser(id="user-2", name="Casey Customer", email="casey@example.com", role="customer")


@pytest.fixture
def sample_business() -> dict:
    """Return a sample business as the API sends it."""
    return {
        "id": "biz-1",
        "name": "Harbour Bakery",
        "description": "Sourdough and pastries",
        "industry": "Food",
        "contactEmail": "hello@harbour.example",
        "contactPhone": "555-0100",
        "website": "https://harbour.example",
        "location": "Portside",
        "address": "1 Quay Street",
        "yearFounded": 2015,
        "typeOfEntity": "LLC",
        "businessHours": "7-15",
        "revenue": "1M",
        "employeeCount": 12,
        "keywords": "bakery,bread",
        "companyLinkedIn": "",
        "companyFacebook": "",
        "companyTwitter": "",
        "technologiesUsed": "",
        "sicCodes": "5461",
    }


@pytest.fixture
def sample_review() -> dict:
    return review_payload("rev-1", "2", rating=5)


@pytest.fixture
def sample_complaint() -> dict:
    return complaint_payload("cmp-1", "1")


@pytest.fixture
def sample_product(sample_review, sample_complaint) -> dict:
    return {
        "id": "prod-1",
        "name": "Sourdough Loaf",
        "description": "Naturally leavened",
        "business": {"id": "biz-1", "name": "Harbour Bakery"},
        "images": [{"id": "img-1", "file": {"url": "/images/loaf.jpg"}}],
        "reviews": [sample_review],
        "complaints": [sample_complaint],
    }


@pytest.fixture
def sample_job() -> dict:
    return {
        "id": "job-1",
        "title": "Baker",
        "description": "Early mornings",
        "location": "Portside",
        "salary": 42000,
        "createdAt": "2024-03-01T08:00:00Z",
    }
