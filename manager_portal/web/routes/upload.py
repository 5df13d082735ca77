"""JSON upload endpoint (phase 1 of an image attachment)."""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import JSONResponse

from manager_portal.assets.store import AssetStore
from manager_portal.core.exceptions import PortalError, ValidationError
from manager_portal.graphql.gateway import FileUpload
from manager_portal.web.dependencies import get_asset_store
from manager_portal.web.models import ErrorResponse, UploadResponse

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Upload"])

DEFAULT_CONTENT_TYPE = "application/octet-stream"


async def read_upload(file: Optional[UploadFile]) -> Optional[FileUpload]:
    """Read a multipart file part into memory, or None when nothing was sent."""
    if file is None or not file.filename:
        return None
    content = await file.read()
    return FileUpload(
        filename=file.filename,
        content=content,
        content_type=file.content_type or DEFAULT_CONTENT_TYPE,
    )


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Upload Image",
)
async def upload_image(
    file: Optional[UploadFile] = File(None),
    product_id: str = Form("", alias="productId"),
    store: AssetStore = Depends(get_asset_store),
):
    """Store one file for a product and return the new asset id."""
    upload = await read_upload(file)
    if upload is None:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "No file uploaded"},
        )
    if not product_id:
        error = ValidationError("Save the product before uploading images.", field="productId")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": error.user_message},
        )

    try:
        asset_id = await store.store(product_id, upload)
    except PortalError as e:
        logger.error("upload_endpoint_failed", product_id=product_id, error=str(e))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": e.user_message},
        )

    logger.info("upload_endpoint_stored", product_id=product_id, asset_id=asset_id)
    return UploadResponse.for_asset(asset_id)
