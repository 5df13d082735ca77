"""Dashboard page: counts across the manager's businesses."""

import structlog
from fastapi import APIRouter, Depends, Request

from manager_portal.auth.guard import require_manager
from manager_portal.core.exceptions import PortalError
from manager_portal.models.entities import SessionUser
from manager_portal.services import DashboardService, DashboardSummary
from manager_portal.web.dependencies import get_dashboard_service
from manager_portal.web.templating import Toast, render_page

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Dashboard"])


@router.get("/dashboard")
async def dashboard_page(
    request: Request,
    user: SessionUser = Depends(require_manager),
    service: DashboardService = Depends(get_dashboard_service),
):
    toast = None
    try:
        summary = await service.summary(user.id)
    except PortalError as e:
        logger.warning("dashboard_load_failed", user_id=user.id, error=str(e))
        summary = DashboardSummary()
        toast = Toast.error(e.user_message)

    return render_page(request, "dashboard.html", {"summary": summary}, toast=toast)
