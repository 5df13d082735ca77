"""Asset storage backends (phase 1 of an attachment).

A store takes the uploaded bytes and returns an opaque asset id.

- LocalGraphQLAssetStore: writes the file under the upload directory and
  registers it with a multipart ``createImage`` mutation.
- HttpAssetStore: posts the file to an external ``/api/upload``-style
  endpoint that answers ``{"id": ...}`` or ``{"data": {"id": ...}}``.
"""

import asyncio
import re
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

import httpx
import structlog

from manager_portal.core.exceptions import ConfigurationError, PortalError, UploadError
from manager_portal.graphql import documents
from manager_portal.graphql.gateway import FileUpload, GraphQLGateway

logger = structlog.get_logger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def safe_filename(filename: Optional[str]) -> str:
    """Reduce a client-supplied filename to a safe basename."""
    name = Path(filename or "").name
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    if not name:
        name = uuid.uuid4().hex
    return name


class AssetStore(ABC):
    """Stores an uploaded file for an owning entity."""

    @abstractmethod
    async def store(self, owner_id: str, upload: FileUpload) -> str:
        """
        Persist ``upload`` and return its asset id.

        Raises:
            UploadError: The file could not be stored or registered.
        """


class LocalGraphQLAssetStore(AssetStore):
    """Saves to disk, then registers the file through the GraphQL API."""

    def __init__(
        self,
        gateway: GraphQLGateway,
        upload_dir: Path,
        bearer_token: Optional[str] = None,
    ):
        self._gateway = gateway
        self._upload_dir = Path(upload_dir)
        self._bearer_token = bearer_token

    def _write(self, filename: str, content: bytes) -> Path:
        self._upload_dir.mkdir(parents=True, exist_ok=True)
        path = self._upload_dir / filename
        path.write_bytes(content)
        return path

    async def store(self, owner_id: str, upload: FileUpload) -> str:
        if not self._bearer_token:
            raise ConfigurationError(
                "UPLOAD_API_TOKEN is required to register uploads",
                config_key="upload_api_token",
            )
        filename = safe_filename(upload.filename)

        # Filesystem writes are blocking; keep them off the event loop.
        loop = asyncio.get_running_loop()
        try:
            path = await loop.run_in_executor(None, self._write, filename, upload.content)
        except OSError as e:
            logger.error("asset_write_failed", filename=filename, error=str(e))
            raise UploadError(f"Could not save {filename}: {e}", {"filename": filename}) from e

        logger.info("asset_saved", path=str(path), size=len(upload.content))

        try:
            result = await self._gateway.execute_multipart(
                documents.CREATE_IMAGE,
                {"productId": owner_id},
                {"file": FileUpload(filename, upload.content, upload.content_type)},
                bearer_token=self._bearer_token,
            )
            image = result.unwrap().get("createImage") or {}
        except PortalError as e:
            logger.error("asset_register_failed", filename=filename, error=str(e))
            raise UploadError(f"Could not register {filename}: {e.message}", {"filename": filename}) from e

        asset_id = image.get("id")
        if not asset_id:
            raise UploadError("Upload service returned no asset id", {"filename": filename})
        return str(asset_id)


class HttpAssetStore(AssetStore):
    """Posts the file to an external upload endpoint."""

    def __init__(self, endpoint: str, client: Optional[httpx.AsyncClient] = None):
        self._endpoint = endpoint
        self._client = client

    async def store(self, owner_id: str, upload: FileUpload) -> str:
        filename = safe_filename(upload.filename)
        files = {"file": (filename, upload.content, upload.content_type)}
        data = {"productId": owner_id}

        try:
            if self._client is not None:
                response = await self._client.post(self._endpoint, data=data, files=files)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.post(self._endpoint, data=data, files=files)
        except httpx.RequestError as e:
            logger.error("asset_upload_transport_error", endpoint=self._endpoint, error=str(e))
            raise UploadError(f"Upload endpoint unreachable: {e}") from e

        if not response.is_success:
            raise UploadError(
                f"Upload endpoint returned HTTP {response.status_code}",
                {"status_code": response.status_code},
            )

        try:
            body: Any = response.json()
        except ValueError as e:
            raise UploadError("Upload endpoint returned invalid JSON") from e

        asset_id = _asset_id_from(body)
        if not asset_id:
            raise UploadError("Upload endpoint returned no asset id")
        return asset_id


def _asset_id_from(body: Any) -> Optional[str]:
    if not isinstance(body, dict):
        return None
    if body.get("id"):
        return str(body["id"])
    data = body.get("data")
    if isinstance(data, dict) and data.get("id"):
        return str(data["id"])
    return None
