"""Job listing page: inline edit and mass delete."""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Form, Request

from manager_portal.auth.guard import require_manager
from manager_portal.core.exceptions import PortalError
from manager_portal.core.results import Err
from manager_portal.models.entities import JobListing, SessionUser
from manager_portal.services import JobListingsService
from manager_portal.web.dependencies import get_job_listings_service
from manager_portal.web.listing import handle_mass_delete
from manager_portal.web.templating import Toast, render_page

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Job Listings"])


async def _render(
    request: Request,
    user: SessionUser,
    service: JobListingsService,
    toast: Optional[Toast] = None,
    jobs: Optional[list[JobListing]] = None,
    editing: Optional[str] = None,
    values: Optional[dict] = None,
):
    if jobs is None:
        try:
            jobs = await service.list_job_listings(user.id)
        except PortalError as e:
            logger.warning("job_listings_load_failed", user_id=user.id, error=str(e))
            jobs = []
            toast = toast or Toast.error(e.user_message)
    return render_page(
        request,
        "job_listings.html",
        {"jobs": jobs, "editing": editing, "values": values or {}},
        toast=toast,
    )


@router.get("/job-listings")
async def job_listings_page(
    request: Request,
    edit: Optional[str] = None,
    user: SessionUser = Depends(require_manager),
    service: JobListingsService = Depends(get_job_listings_service),
):
    return await _render(request, user, service, editing=edit)


@router.post("/job-listings/delete")
async def delete_job_listings(
    request: Request,
    ids: list[str] = Form([]),
    select_all: str = Form(""),
    confirmed: str = Form(""),
    user: SessionUser = Depends(require_manager),
    service: JobListingsService = Depends(get_job_listings_service),
):
    if select_all == "on":
        try:
            ids = [j.id for j in await service.list_job_listings(user.id)]
        except PortalError as e:
            return await _render(request, user, service, Toast.error(e.user_message))

    return await handle_mass_delete(
        request,
        service.mass_delete(user.id),
        ids,
        confirmed,
        action="/job-listings/delete",
        cancel_url="/job-listings",
        render_list=lambda toast, items: _render(request, user, service, toast, items),
    )


@router.post("/job-listings/{job_id}")
async def submit_job_listing(
    job_id: str,
    request: Request,
    user: SessionUser = Depends(require_manager),
    service: JobListingsService = Depends(get_job_listings_service),
):
    """Save an inline edit; only changed fields are sent."""
    try:
        jobs = await service.list_job_listings(user.id)
    except PortalError as e:
        return await _render(request, user, service, Toast.error(e.user_message))

    job = next((j for j in jobs if j.id == job_id), None)
    if job is None:
        return await _render(request, user, service, Toast.error("Job listing not found."), jobs=jobs)

    posted = {k: v for k, v in (await request.form()).items() if isinstance(v, str)}
    _, outcome = await service.submit_edit(job, posted)

    if isinstance(outcome, Err):
        return await _render(
            request, user, service,
            Toast.error(outcome.message),
            jobs=jobs,
            editing=job_id,
            values=posted,
        )
    if outcome.value is None:
        return await _render(request, user, service, Toast.success("No changes to save."), jobs=jobs)
    return await _render(request, user, service, Toast.success("Job listing updated."))
