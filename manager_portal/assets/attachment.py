"""Two-phase asset attachment.

Phase 1 stores the file and yields an asset id; phase 2 links that id to
the owning product. If phase 2 fails the asset is orphaned and reported via
LinkError; there is no compensating delete.

The owner must already exist: without an owner id the flow fails before
any network call.
"""

from dataclasses import dataclass
from typing import Optional

import structlog

from manager_portal.assets.store import AssetStore
from manager_portal.core.exceptions import LinkError, PortalError, UploadError, ValidationError
from manager_portal.graphql import documents
from manager_portal.graphql.gateway import FileUpload, GraphQLGateway

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Attachment:
    owner_id: str
    asset_id: str


class AssetAttachmentFlow:
    """Uploads an image and connects it to a product."""

    def __init__(self, store: AssetStore, gateway: GraphQLGateway):
        self._store = store
        self._gateway = gateway

    async def attach(self, owner_id: Optional[str], upload: FileUpload) -> Attachment:
        """
        Run both phases.

        Raises:
            ValidationError: No owner id yet, or an empty file.
            UploadError: Phase 1 failed; nothing was linked.
            LinkError: Phase 2 failed; ``asset_id`` is orphaned.
        """
        if not owner_id:
            raise ValidationError(
                "Save the product before uploading images.",
                field="productId",
            )
        if not upload.content:
            raise ValidationError("The uploaded file is empty.", field="file")

        try:
            asset_id = await self._store.store(owner_id, upload)
        except UploadError:
            raise
        except PortalError as e:
            raise UploadError(f"Upload failed: {e.message}") from e

        try:
            result = await self._gateway.execute(
                documents.LINK_PRODUCT_IMAGE,
                {"productId": owner_id, "imageId": asset_id},
            )
            result.unwrap()
        except PortalError as e:
            logger.error(
                "asset_orphaned",
                owner_id=owner_id,
                asset_id=asset_id,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise LinkError(
                f"Image {asset_id} was stored but could not be linked: {e.message}",
                asset_id=asset_id,
                details={"owner_id": owner_id},
            ) from e

        logger.info("asset_attached", owner_id=owner_id, asset_id=asset_id)
        return Attachment(owner_id=owner_id, asset_id=asset_id)

    async def delete_image(self, image_id: str) -> str:
        result = await self._gateway.execute(documents.DELETE_IMAGE, {"imageId": image_id})
        result.unwrap()
        logger.info("image_deleted", image_id=image_id)
        return image_id
