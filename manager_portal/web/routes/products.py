"""Product pages: list, add, edit, images and per-product moderation."""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from fastapi.responses import RedirectResponse

from manager_portal.assets.attachment import AssetAttachmentFlow
from manager_portal.auth.guard import require_manager
from manager_portal.core.exceptions import PortalError, ValidationError
from manager_portal.core.results import Err, run_command
from manager_portal.models.entities import Product, SessionUser
from manager_portal.models.status import ReviewModeration
from manager_portal.moderation.service import ModerationService, ModerationTarget
from manager_portal.services import ProductsService
from manager_portal.web.dependencies import (
    get_attachment_flow,
    get_moderation_service,
    get_products_service,
)
from manager_portal.web.routes.upload import read_upload
from manager_portal.web.templating import Toast, render_page

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Products"])


def _see_other(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)


# =============================================================================
# Product List
# =============================================================================


async def _render_list(
    request: Request,
    user: SessionUser,
    service: ProductsService,
    toast: Optional[Toast] = None,
):
    products: list[Product] = []
    try:
        products = await service.list_products(user.id)
    except PortalError as e:
        logger.warning("products_load_failed", user_id=user.id, error=str(e))
        toast = Toast.error(e.user_message)
    return render_page(request, "products.html", {"products": products}, toast=toast)


@router.get("/products")
async def products_page(
    request: Request,
    user: SessionUser = Depends(require_manager),
    service: ProductsService = Depends(get_products_service),
):
    return await _render_list(request, user, service)


@router.post("/products/{product_id}/delete")
async def delete_product(
    product_id: str,
    request: Request,
    confirmed: str = Form(""),
    user: SessionUser = Depends(require_manager),
    service: ProductsService = Depends(get_products_service),
):
    """Ask for confirmation, then delete one product."""
    if confirmed != "yes":
        return render_page(
            request,
            "confirm_delete.html",
            {
                "action": f"/products/{product_id}/delete",
                "cancel_url": "/products",
                "count": 1,
                "entity_label": "product",
                "ids": [product_id],
            },
        )

    outcome = await run_command("delete_product", lambda: service.delete_product(product_id))
    if isinstance(outcome, Err):
        return await _render_list(request, user, service, Toast.error(outcome.message))
    return _see_other("/products?toast=product_deleted")


# =============================================================================
# Add Product
# =============================================================================


async def _render_add(
    request: Request,
    user: SessionUser,
    service: ProductsService,
    product_id: Optional[str] = None,
    values: Optional[dict] = None,
    toast: Optional[Toast] = None,
    status_code: int = 200,
):
    businesses = []
    try:
        businesses = await service.list_businesses(user.id)
    except PortalError as e:
        logger.warning("product_businesses_load_failed", user_id=user.id, error=str(e))
        toast = toast or Toast.error(e.user_message)

    return render_page(
        request,
        "add_product.html",
        {
            "businesses": businesses,
            "product_id": product_id,
            "values": values or {},
        },
        toast=toast,
        status_code=status_code,
    )


@router.get("/add-product")
async def add_product_page(
    request: Request,
    product_id: Optional[str] = None,
    user: SessionUser = Depends(require_manager),
    service: ProductsService = Depends(get_products_service),
):
    return await _render_add(request, user, service, product_id=product_id)


@router.post("/add-product")
async def create_product(
    request: Request,
    business_id: str = Form("", alias="businessId"),
    name: str = Form(""),
    description: str = Form(""),
    user: SessionUser = Depends(require_manager),
    service: ProductsService = Depends(get_products_service),
):
    outcome = await run_command(
        "create_product",
        lambda: service.create_product(business_id, name, description),
    )
    if isinstance(outcome, Err):
        values = {"businessId": business_id, "name": name, "description": description}
        return await _render_add(request, user, service, values=values, toast=Toast.error(outcome.message))

    # Uploads are offered only once the product exists.
    return _see_other(f"/add-product?product_id={outcome.value}&toast=product_created")


@router.post("/add-product/images")
async def add_product_image(
    request: Request,
    product_id: str = Form("", alias="productId"),
    file: Optional[UploadFile] = File(None),
    user: SessionUser = Depends(require_manager),
    service: ProductsService = Depends(get_products_service),
    flow: AssetAttachmentFlow = Depends(get_attachment_flow),
):
    toast = await _attach(flow, product_id or None, file)
    return await _render_add(request, user, service, product_id=product_id or None, toast=toast)


async def _attach(
    flow: AssetAttachmentFlow,
    product_id: Optional[str],
    file: Optional[UploadFile],
) -> Toast:
    upload = await read_upload(file)
    if upload is None:
        return Toast.error(ValidationError("Choose an image to upload.", field="file").user_message)

    outcome = await run_command("attach_image", lambda: flow.attach(product_id, upload))
    return Toast.from_result(outcome, "Image uploaded.")


# =============================================================================
# Edit Product
# =============================================================================


async def _render_edit(
    request: Request,
    user: SessionUser,
    service: ProductsService,
    product_id: str,
    toast: Optional[Toast] = None,
    values: Optional[dict] = None,
    product: Optional[Product] = None,
):
    businesses = []
    try:
        if product is None:
            product = await service.get_product(product_id)
        businesses = await service.list_businesses(user.id)
    except PortalError as e:
        logger.warning("product_load_failed", product_id=product_id, error=str(e))
        toast = toast or Toast.error(e.user_message)

    if values is None and product is not None:
        values = {
            "name": product.name or "",
            "description": product.description or "",
            "businessId": product.business.id if product.business else "",
        }

    return render_page(
        request,
        "edit_product.html",
        {
            "product": product,
            "product_id": product_id,
            "businesses": businesses,
            "values": values or {},
            "review_statuses": list(ReviewModeration),
        },
        toast=toast,
    )


@router.get("/edit-product/{product_id}")
async def edit_product_page(
    product_id: str,
    request: Request,
    user: SessionUser = Depends(require_manager),
    service: ProductsService = Depends(get_products_service),
):
    return await _render_edit(request, user, service, product_id)


@router.post("/edit-product/{product_id}")
async def submit_product_edit(
    product_id: str,
    request: Request,
    user: SessionUser = Depends(require_manager),
    service: ProductsService = Depends(get_products_service),
):
    """Send only the product fields that changed."""
    try:
        product = await service.get_product(product_id)
    except PortalError as e:
        return await _render_edit(request, user, service, product_id, Toast.error(e.user_message))

    posted = {k: v for k, v in (await request.form()).items() if isinstance(v, str)}
    _, outcome = await service.submit_edit(product, posted)

    if isinstance(outcome, Err):
        return await _render_edit(
            request, user, service, product_id,
            toast=Toast.error(outcome.message),
            values=posted,
            product=product,
        )
    if outcome.value is None:
        return await _render_edit(
            request, user, service, product_id,
            toast=Toast.success("No changes to save."),
            product=product,
        )
    return _see_other("/products?toast=product_updated")


@router.post("/edit-product/{product_id}/images")
async def upload_product_image(
    product_id: str,
    request: Request,
    file: Optional[UploadFile] = File(None),
    user: SessionUser = Depends(require_manager),
    service: ProductsService = Depends(get_products_service),
    flow: AssetAttachmentFlow = Depends(get_attachment_flow),
):
    toast = await _attach(flow, product_id, file)
    return await _render_edit(request, user, service, product_id, toast)


@router.post("/edit-product/{product_id}/images/{image_id}/delete")
async def delete_product_image(
    product_id: str,
    image_id: str,
    request: Request,
    user: SessionUser = Depends(require_manager),
    service: ProductsService = Depends(get_products_service),
    flow: AssetAttachmentFlow = Depends(get_attachment_flow),
):
    outcome = await run_command("delete_image", lambda: flow.delete_image(image_id))
    return await _render_edit(
        request, user, service, product_id,
        Toast.from_result(outcome, "Image deleted."),
    )


# =============================================================================
# Product Reviews and Complaints
# =============================================================================


@router.post("/edit-product/{product_id}/reviews/{review_id}/status")
async def set_product_review_status(
    product_id: str,
    review_id: str,
    request: Request,
    moderation_status: str = Form("", alias="moderationStatus"),
    user: SessionUser = Depends(require_manager),
    service: ProductsService = Depends(get_products_service),
    moderation: ModerationService = Depends(get_moderation_service),
):
    outcome = await moderation.change_review_status(
        review_id,
        moderation_status,
        refetch=lambda: service.get_product(product_id),
        target=ModerationTarget.PRODUCT,
    )
    if isinstance(outcome, Err):
        return await _render_edit(request, user, service, product_id, Toast.error(outcome.message))
    return await _render_edit(
        request, user, service, product_id,
        Toast.success("Review status updated."),
        product=outcome.value,
    )


@router.post("/edit-product/{product_id}/complaints/{complaint_id}/status")
async def set_product_complaint_status(
    product_id: str,
    complaint_id: str,
    request: Request,
    complaint_status: str = Form("", alias="status"),
    user: SessionUser = Depends(require_manager),
    service: ProductsService = Depends(get_products_service),
    moderation: ModerationService = Depends(get_moderation_service),
):
    outcome = await moderation.change_complaint_status(
        complaint_id,
        complaint_status,
        refetch=lambda: service.get_product(product_id),
        target=ModerationTarget.PRODUCT,
    )
    if isinstance(outcome, Err):
        return await _render_edit(request, user, service, product_id, Toast.error(outcome.message))
    return await _render_edit(
        request, user, service, product_id,
        Toast.success("Complaint status updated."),
        product=outcome.value,
    )
