"""GraphQL Client Gateway.

The single place where the portal talks to the remote GraphQL API. Every
read and write is a POST of ``{query, variables}`` to one configured
endpoint; file-carrying mutations use the GraphQL multipart request
convention (``operations`` / ``map`` / numbered file parts).

The gateway never retries and adds no timeout policy of its own. Results
are tagged: ``GraphQLSuccess`` or ``GraphQLFailure``. Transport and protocol
problems raise instead, because there is no GraphQL payload to return.

Example:
    async with GraphQLGateway("https://api.example.com/graphql") as gateway:
        result = await gateway.execute(documents.USER_BUSINESSES, {"where": {"id": user_id}})
        data = result.unwrap()
"""

import json
import re
from dataclasses import dataclass, field
from typing import Any, Optional, Union

import httpx
import structlog

from manager_portal.core.exceptions import ApiError, ProtocolError, TransportError

logger = structlog.get_logger(__name__)

_OPERATION_NAME = re.compile(r"\b(?:query|mutation)\s+([A-Za-z_][A-Za-z0-9_]*)")


def operation_name_of(document: str) -> Optional[str]:
    """Return the first named operation in a document, if any."""
    match = _OPERATION_NAME.search(document)
    return match.group(1) if match else None


# =============================================================================
# Result Types
# =============================================================================


@dataclass(frozen=True)
class GraphQLErrorDetail:
    """One entry of a GraphQL ``errors`` array."""

    message: str
    path: tuple[Union[str, int], ...] = ()
    extensions: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> "GraphQLErrorDetail":
        if not isinstance(payload, dict):
            return cls(message=str(payload))
        return cls(
            message=str(payload.get("message") or "Unknown GraphQL error"),
            path=tuple(payload.get("path") or ()),
            extensions=dict(payload.get("extensions") or {}),
        )


@dataclass(frozen=True)
class GraphQLSuccess:
    """A response carrying ``data`` and no errors."""

    data: dict[str, Any]
    operation: Optional[str] = None

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> dict[str, Any]:
        return self.data


@dataclass(frozen=True)
class GraphQLFailure:
    """A 200 response whose body carries an ``errors`` array."""

    errors: tuple[GraphQLErrorDetail, ...]
    operation: Optional[str] = None

    @property
    def ok(self) -> bool:
        return False

    @property
    def messages(self) -> list[str]:
        return [error.message for error in self.errors]

    def unwrap(self) -> dict[str, Any]:
        raise ApiError(self.messages, operation=self.operation)


GraphQLResult = Union[GraphQLSuccess, GraphQLFailure]


@dataclass(frozen=True)
class FileUpload:
    """A file part for a multipart GraphQL request."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


# =============================================================================
# Gateway
# =============================================================================


class GraphQLGateway:
    """Async gateway to the GraphQL endpoint.

    Owns one ``httpx.AsyncClient`` unless a client is injected (tests inject
    one built on ``httpx.MockTransport``).
    """

    def __init__(
        self,
        endpoint: str,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the gateway.

        Args:
            endpoint: GraphQL endpoint URL.
            client: Optional pre-built HTTP client. The gateway only closes
                clients it created itself.
        """
        self._endpoint = endpoint
        self._client = client
        self._owns_client = client is None

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def __aenter__(self) -> "GraphQLGateway":
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient()
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client if the gateway created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def execute(
        self,
        document: str,
        variables: Optional[dict[str, Any]] = None,
    ) -> GraphQLResult:
        """Execute a query or mutation.

        Args:
            document: GraphQL document text.
            variables: Variables for the operation.

        Returns:
            GraphQLSuccess or GraphQLFailure.

        Raises:
            TransportError: The endpoint could not be reached.
            ProtocolError: Non-2xx status or a body that is not a JSON object.
        """
        operation = operation_name_of(document)
        payload = {"query": document, "variables": variables or {}}

        logger.debug("graphql_request", operation=operation)
        response = await self._post(
            operation,
            json=payload,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )
        return self._parse(response, operation)

    async def execute_multipart(
        self,
        document: str,
        variables: dict[str, Any],
        files: dict[str, FileUpload],
        bearer_token: Optional[str] = None,
    ) -> GraphQLResult:
        """Execute a file-carrying mutation using the multipart convention.

        Args:
            document: GraphQL mutation text.
            variables: Variables; the entries named in ``files`` are sent as null.
            files: Map of variable name (e.g. ``"file"``) to the file to send.
            bearer_token: Optional token for the Authorization header.

        Returns:
            GraphQLSuccess or GraphQLFailure.
        """
        operation = operation_name_of(document)
        operation_variables = dict(variables)
        file_map: dict[str, list[str]] = {}
        parts: dict[str, tuple[str, bytes, str]] = {}

        for index, (variable, upload) in enumerate(files.items()):
            key = str(index)
            operation_variables[variable] = None
            file_map[key] = [f"variables.{variable}"]
            parts[key] = (upload.filename, upload.content, upload.content_type)

        headers = {"x-apollo-operation-name": operation or "Upload"}
        if bearer_token:
            headers["Authorization"] = f"Bearer {bearer_token}"

        logger.debug("graphql_multipart_request", operation=operation, files=len(parts))
        response = await self._post(
            operation,
            data={
                "operations": json.dumps({"query": document, "variables": operation_variables}),
                "map": json.dumps(file_map),
            },
            files=parts,
            headers=headers,
        )
        return self._parse(response, operation)

    async def _post(self, operation: Optional[str], **kwargs: Any) -> httpx.Response:
        client = self._ensure_client()
        try:
            return await client.post(self._endpoint, **kwargs)
        except httpx.RequestError as e:
            logger.error("graphql_transport_error", operation=operation, error=str(e))
            raise TransportError(
                f"Request to GraphQL endpoint failed: {e}",
                {"operation": operation, "endpoint": self._endpoint},
            ) from e

    def _parse(self, response: httpx.Response, operation: Optional[str]) -> GraphQLResult:
        if not response.is_success:
            logger.error(
                "graphql_http_error",
                operation=operation,
                status_code=response.status_code,
            )
            raise ProtocolError(
                f"GraphQL endpoint returned HTTP {response.status_code}",
                status_code=response.status_code,
                details={"operation": operation},
            )

        try:
            body = response.json()
        except ValueError as e:
            logger.error("graphql_malformed_json", operation=operation)
            raise ProtocolError(
                "GraphQL response was not valid JSON",
                status_code=response.status_code,
                details={"operation": operation},
            ) from e

        if not isinstance(body, dict):
            raise ProtocolError(
                "GraphQL response was not a JSON object",
                status_code=response.status_code,
                details={"operation": operation},
            )

        errors = body.get("errors")
        if errors:
            details = tuple(GraphQLErrorDetail.from_payload(e) for e in errors)
            logger.warning(
                "graphql_failed",
                operation=operation,
                errors=[d.message for d in details],
            )
            return GraphQLFailure(errors=details, operation=operation)

        data = body.get("data")
        if not isinstance(data, dict):
            raise ProtocolError(
                "GraphQL response has neither data nor errors",
                status_code=response.status_code,
                details={"operation": operation},
            )

        return GraphQLSuccess(data=data, operation=operation)
