"""Business review pages: list, mass delete, detail, status and replies."""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Form, Request

from manager_portal.auth.guard import require_manager
from manager_portal.core.exceptions import PortalError
from manager_portal.core.results import Err, run_command
from manager_portal.models.entities import Review, SessionUser
from manager_portal.models.status import ReviewModeration
from manager_portal.moderation.service import ModerationService
from manager_portal.services import ReviewsService
from manager_portal.web.dependencies import get_moderation_service, get_reviews_service
from manager_portal.web.listing import handle_mass_delete
from manager_portal.web.templating import Toast, render_page

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Reviews"])

STATUS_CHOICES = list(ReviewModeration)


async def _render_list(
    request: Request,
    user: SessionUser,
    service: ReviewsService,
    toast: Optional[Toast] = None,
    reviews: Optional[list[Review]] = None,
):
    if reviews is None:
        try:
            reviews = await service.list_reviews(user.id)
        except PortalError as e:
            logger.warning("reviews_load_failed", user_id=user.id, error=str(e))
            reviews = []
            toast = toast or Toast.error(e.user_message)
    return render_page(request, "reviews.html", {"reviews": reviews}, toast=toast)


async def _render_detail(
    request: Request,
    review_id: str,
    service: ReviewsService,
    toast: Optional[Toast] = None,
    review: Optional[Review] = None,
):
    if review is None:
        try:
            review = await service.get_review(review_id)
        except PortalError as e:
            logger.warning("review_load_failed", review_id=review_id, error=str(e))
            toast = toast or Toast.error(e.user_message)
    return render_page(
        request,
        "review.html",
        {"review": review, "review_id": review_id, "statuses": STATUS_CHOICES},
        toast=toast,
    )


@router.get("/reviews")
async def reviews_page(
    request: Request,
    user: SessionUser = Depends(require_manager),
    service: ReviewsService = Depends(get_reviews_service),
):
    return await _render_list(request, user, service)


@router.post("/reviews/delete")
async def delete_reviews(
    request: Request,
    ids: list[str] = Form([]),
    select_all: str = Form(""),
    confirmed: str = Form(""),
    user: SessionUser = Depends(require_manager),
    service: ReviewsService = Depends(get_reviews_service),
):
    """Delete the selected reviews one at a time after confirmation."""
    if select_all == "on":
        try:
            ids = [r.id for r in await service.list_reviews(user.id)]
        except PortalError as e:
            return await _render_list(request, user, service, Toast.error(e.user_message))

    return await handle_mass_delete(
        request,
        service.mass_delete(user.id),
        ids,
        confirmed,
        action="/reviews/delete",
        cancel_url="/reviews",
        render_list=lambda toast, items: _render_list(request, user, service, toast, items),
    )


@router.get("/review/{review_id}")
async def review_page(
    review_id: str,
    request: Request,
    service: ReviewsService = Depends(get_reviews_service),
):
    return await _render_detail(request, review_id, service)


@router.post("/review/{review_id}/status")
async def set_review_status(
    review_id: str,
    request: Request,
    moderation_status: str = Form("", alias="moderationStatus"),
    service: ReviewsService = Depends(get_reviews_service),
    moderation: ModerationService = Depends(get_moderation_service),
):
    """Persist a moderation decision, then re-fetch the review."""
    outcome = await moderation.change_review_status(
        review_id,
        moderation_status,
        refetch=lambda: service.get_review(review_id),
    )
    if isinstance(outcome, Err):
        return await _render_detail(request, review_id, service, Toast.error(outcome.message))
    return await _render_detail(
        request, review_id, service,
        Toast.success(f"Review marked {outcome.value.moderation_status.label}."),
        review=outcome.value,
    )


@router.post("/review/{review_id}/replies")
async def reply_to_review(
    review_id: str,
    request: Request,
    content: str = Form(""),
    service: ReviewsService = Depends(get_reviews_service),
    moderation: ModerationService = Depends(get_moderation_service),
):
    outcome = await run_command(
        "add_review_reply",
        lambda: moderation.add_review_reply(review_id, content),
    )
    return await _render_detail(
        request, review_id, service,
        Toast.from_result(outcome, "Reply posted."),
    )
