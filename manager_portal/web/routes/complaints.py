"""Business complaint pages: list, mass delete, detail, status and replies."""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Form, Request

from manager_portal.auth.guard import require_manager
from manager_portal.core.exceptions import PortalError
from manager_portal.core.results import Err, run_command
from manager_portal.models.entities import Complaint, SessionUser
from manager_portal.models.status import ComplaintStatus
from manager_portal.moderation.service import ModerationService
from manager_portal.services import ComplaintsService
from manager_portal.web.dependencies import get_complaints_service, get_moderation_service
from manager_portal.web.listing import handle_mass_delete
from manager_portal.web.templating import Toast, render_page

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Complaints"])

STATUS_CHOICES = list(ComplaintStatus)


async def _render_list(
    request: Request,
    user: SessionUser,
    service: ComplaintsService,
    toast: Optional[Toast] = None,
    complaints: Optional[list[Complaint]] = None,
):
    if complaints is None:
        try:
            complaints = await service.list_complaints(user.id)
        except PortalError as e:
            logger.warning("complaints_load_failed", user_id=user.id, error=str(e))
            complaints = []
            toast = toast or Toast.error(e.user_message)
    return render_page(request, "complaints.html", {"complaints": complaints}, toast=toast)


async def _render_detail(
    request: Request,
    complaint_id: str,
    service: ComplaintsService,
    toast: Optional[Toast] = None,
    complaint: Optional[Complaint] = None,
):
    if complaint is None:
        try:
            complaint = await service.get_complaint(complaint_id)
        except PortalError as e:
            logger.warning("complaint_load_failed", complaint_id=complaint_id, error=str(e))
            toast = toast or Toast.error(e.user_message)
    return render_page(
        request,
        "complaint.html",
        {"complaint": complaint, "complaint_id": complaint_id, "statuses": STATUS_CHOICES},
        toast=toast,
    )


def _status_toast(outcome) -> Toast:
    if isinstance(outcome, Err):
        return Toast.error(outcome.message)
    return Toast.success(f"Complaint marked {outcome.value.status.label}.")


@router.get("/complaints")
async def complaints_page(
    request: Request,
    user: SessionUser = Depends(require_manager),
    service: ComplaintsService = Depends(get_complaints_service),
):
    return await _render_list(request, user, service)


@router.post("/complaints/delete")
async def delete_complaints(
    request: Request,
    ids: list[str] = Form([]),
    select_all: str = Form(""),
    confirmed: str = Form(""),
    user: SessionUser = Depends(require_manager),
    service: ComplaintsService = Depends(get_complaints_service),
):
    if select_all == "on":
        try:
            ids = [c.id for c in await service.list_complaints(user.id)]
        except PortalError as e:
            return await _render_list(request, user, service, Toast.error(e.user_message))

    return await handle_mass_delete(
        request,
        service.mass_delete(user.id),
        ids,
        confirmed,
        action="/complaints/delete",
        cancel_url="/complaints",
        render_list=lambda toast, items: _render_list(request, user, service, toast, items),
    )


@router.get("/complaint/{complaint_id}")
async def complaint_page(
    complaint_id: str,
    request: Request,
    service: ComplaintsService = Depends(get_complaints_service),
):
    return await _render_detail(request, complaint_id, service)


@router.post("/complaint/{complaint_id}/status")
async def set_complaint_status(
    complaint_id: str,
    request: Request,
    complaint_status: str = Form("", alias="status"),
    service: ComplaintsService = Depends(get_complaints_service),
    moderation: ModerationService = Depends(get_moderation_service),
):
    outcome = await moderation.change_complaint_status(
        complaint_id,
        complaint_status,
        refetch=lambda: service.get_complaint(complaint_id),
    )
    return await _render_detail(
        request, complaint_id, service,
        _status_toast(outcome),
        complaint=outcome.value if not isinstance(outcome, Err) else None,
    )


@router.post("/complaint/{complaint_id}/toggle")
async def toggle_complaint(
    complaint_id: str,
    request: Request,
    current: str = Form(""),
    service: ComplaintsService = Depends(get_complaints_service),
    moderation: ModerationService = Depends(get_moderation_service),
):
    """Flip between resolved and unresolved, then re-fetch."""
    changed = await run_command(
        "toggle_complaint",
        lambda: moderation.toggle_complaint(complaint_id, current),
    )
    if isinstance(changed, Err):
        return await _render_detail(request, complaint_id, service, Toast.error(changed.message))

    outcome = await run_command("toggle_complaint_refetch", lambda: service.get_complaint(complaint_id))
    return await _render_detail(
        request, complaint_id, service,
        _status_toast(outcome),
        complaint=outcome.value if not isinstance(outcome, Err) else None,
    )


@router.post("/complaint/{complaint_id}/replies")
async def reply_to_complaint(
    complaint_id: str,
    request: Request,
    content: str = Form(""),
    service: ComplaintsService = Depends(get_complaints_service),
    moderation: ModerationService = Depends(get_moderation_service),
):
    outcome = await run_command(
        "add_complaint_reply",
        lambda: moderation.add_complaint_reply(complaint_id, content),
    )
    return await _render_detail(
        request, complaint_id, service,
        Toast.from_result(outcome, "Reply posted."),
    )
