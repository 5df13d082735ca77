"""Image upload and attachment."""

from manager_portal.assets.attachment import AssetAttachmentFlow, Attachment
from manager_portal.assets.store import (
    AssetStore,
    HttpAssetStore,
    LocalGraphQLAssetStore,
    safe_filename,
)

__all__ = [
    "AssetAttachmentFlow",
    "AssetStore",
    "Attachment",
    "HttpAssetStore",
    "LocalGraphQLAssetStore",
    "safe_filename",
]
