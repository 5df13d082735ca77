"""Account page: profile details and password change."""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Form, Request

from manager_portal.auth.guard import require_manager
from manager_portal.core.exceptions import PortalError
from manager_portal.core.results import Err, run_command
from manager_portal.models.entities import Account, SessionUser
from manager_portal.services import AccountService
from manager_portal.web.dependencies import get_account_service
from manager_portal.web.templating import Toast, render_page

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Account"])


async def _render(
    request: Request,
    user: SessionUser,
    service: AccountService,
    toast: Optional[Toast] = None,
    account: Optional[Account] = None,
    values: Optional[dict] = None,
):
    if account is None:
        try:
            account = await service.get_account(user.id)
        except PortalError as e:
            logger.warning("account_load_failed", user_id=user.id, error=str(e))
            toast = toast or Toast.error(e.user_message)

    if values is None:
        values = {"name": account.name or "", "email": account.email or ""} if account else {}
    return render_page(request, "account.html", {"account": account, "values": values}, toast=toast)


@router.get("/account")
async def account_page(
    request: Request,
    user: SessionUser = Depends(require_manager),
    service: AccountService = Depends(get_account_service),
):
    return await _render(request, user, service)


@router.post("/account")
async def update_account(
    request: Request,
    user: SessionUser = Depends(require_manager),
    service: AccountService = Depends(get_account_service),
):
    try:
        account = await service.get_account(user.id)
    except PortalError as e:
        return await _render(request, user, service, Toast.error(e.user_message))

    posted = {k: v for k, v in (await request.form()).items() if isinstance(v, str)}
    _, outcome = await service.submit_profile(account, posted)

    if isinstance(outcome, Err):
        return await _render(request, user, service, Toast.error(outcome.message), account, posted)
    if outcome.value is None:
        return await _render(request, user, service, Toast.success("No changes to save."), account)
    return await _render(request, user, service, Toast.success("Account updated."), outcome.value)


@router.post("/account/password")
async def change_password(
    request: Request,
    current_password: str = Form("", alias="currentPassword"),
    new_password: str = Form("", alias="newPassword"),
    user: SessionUser = Depends(require_manager),
    service: AccountService = Depends(get_account_service),
):
    outcome = await run_command(
        "change_password",
        lambda: service.change_password(user.id, current_password, new_password),
    )
    return await _render(request, user, service, Toast.from_result(outcome, "Password changed."))
