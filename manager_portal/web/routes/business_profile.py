"""Business profile page with independently submitted panels."""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Request

from manager_portal.auth.guard import require_manager
from manager_portal.core.exceptions import PortalError, ValidationError
from manager_portal.core.results import Err
from manager_portal.forms.business import PANELS, BusinessProfileService, panel
from manager_portal.models.entities import Business, SessionUser
from manager_portal.web.dependencies import get_business_service
from manager_portal.web.templating import Toast, render_page

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Business"])

PANEL_TITLES = {
    "basic": "Basic Information",
    "business": "Business Details",
    "contact": "Contact Information",
    "online": "Online Presence",
}

FIELD_LABELS = {
    "name": "Name",
    "industry": "Industry",
    "yearFounded": "Year Founded",
    "typeOfEntity": "Type of Entity",
    "description": "Description",
    "businessHours": "Business Hours",
    "revenue": "Revenue",
    "employeeCount": "Employee Count",
    "keywords": "Keywords",
    "contactEmail": "Contact Email",
    "contactPhone": "Contact Phone",
    "website": "Website",
    "location": "Location",
    "address": "Address",
    "companyLinkedIn": "LinkedIn",
    "companyFacebook": "Facebook",
    "companyTwitter": "Twitter",
    "technologiesUsed": "Technologies Used",
    "sicCodes": "SIC Codes",
}


def _render(
    request: Request,
    business: Optional[Business],
    toast: Optional[Toast] = None,
    values: Optional[dict] = None,
    status_code: int = 200,
):
    return render_page(
        request,
        "business_profile.html",
        {
            "business": business,
            "values": values if values is not None else (business.to_wire() if business else {}),
            "panels": [(key, PANEL_TITLES[key], PANELS[key]) for key in PANEL_TITLES],
            "labels": FIELD_LABELS,
        },
        toast=toast,
        status_code=status_code,
    )


@router.get("/business-profile")
async def business_profile_page(
    request: Request,
    user: SessionUser = Depends(require_manager),
    service: BusinessProfileService = Depends(get_business_service),
):
    try:
        business = await service.load(user.id)
    except PortalError as e:
        logger.warning("business_profile_load_failed", user_id=user.id, error=str(e))
        return _render(request, None, Toast.error(e.user_message))

    toast = None if business else Toast.error("No business is linked to your account yet.")
    return _render(request, business, toast)


@router.post("/business-profile/{panel_name}")
async def submit_business_panel(
    panel_name: str,
    request: Request,
    user: SessionUser = Depends(require_manager),
    service: BusinessProfileService = Depends(get_business_service),
):
    """Submit one panel; only the fields changed in that panel are sent."""
    try:
        panel(panel_name)
        business = await service.load(user.id)
    except ValidationError as e:
        return _render(request, None, Toast.error(e.user_message), status_code=404)
    except PortalError as e:
        return _render(request, None, Toast.error(e.user_message))

    if business is None:
        return _render(request, None, Toast.error("No business is linked to your account yet."))

    posted = {k: v for k, v in (await request.form()).items() if isinstance(v, str)}
    state, outcome = await service.submit_panel(business, panel_name, posted)

    if isinstance(outcome, Err):
        # Keep the user's input on screen so the bad field can be fixed.
        values = {**business.to_wire(), **dict(state.values)}
        return _render(request, business, Toast.error(outcome.message), values=values)

    if outcome.value is None:
        return _render(request, business, Toast.success("No changes to save."))

    try:
        business = await service.load(user.id)
    except PortalError as e:
        logger.warning("business_profile_reload_failed", user_id=user.id, error=str(e))
    return _render(request, business, Toast.success(f"{PANEL_TITLES.get(panel_name, 'Profile')} updated."))
