"""Sign-in, sign-out and the unauthorized page."""

import structlog
from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import RedirectResponse

from manager_portal.auth.guard import (
    AuthContext,
    AuthContextProvider,
    GuardState,
    get_auth_context,
    get_auth_provider,
)
from manager_portal.auth.identity import IdentityService
from manager_portal.config.settings import Settings
from manager_portal.web.dependencies import get_identity_service, get_settings_state
from manager_portal.web.templating import Toast, render_page

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Auth"])

DEFAULT_LANDING = "/dashboard"


@router.get("/auth/signin")
async def signin_page(
    request: Request,
    context: AuthContext = Depends(get_auth_context),
):
    if context.status is GuardState.AUTHORIZED:
        return RedirectResponse(DEFAULT_LANDING, status_code=status.HTTP_303_SEE_OTHER)
    return render_page(request, "signin.html", {"email": ""})


@router.post("/auth/signin")
async def signin(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    identity: IdentityService = Depends(get_identity_service),
    provider: AuthContextProvider = Depends(get_auth_provider),
    settings: Settings = Depends(get_settings_state),
):
    """Verify credentials and start a manager session."""
    attempt = await identity.sign_in(email, password)
    if not attempt.ok:
        return render_page(
            request,
            "signin.html",
            {"email": email},
            toast=Toast.error(attempt.error or "Invalid email or password."),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    response = RedirectResponse(DEFAULT_LANDING, status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        provider.cookie_name,
        provider.issue_token(attempt.user),
        max_age=settings.session_expire_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    return response


@router.post("/auth/signout")
async def signout(
    request: Request,
    provider: AuthContextProvider = Depends(get_auth_provider),
):
    user = provider.session_for(request)
    if user is not None:
        logger.info("signed_out", user_id=user.id)

    request.state.session_cleared = True
    response = RedirectResponse("/auth/signin?toast=signed_out", status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(provider.cookie_name)
    return response


@router.get("/unauthorized")
async def unauthorized_page(
    request: Request,
    context: AuthContext = Depends(get_auth_context),
):
    return render_page(
        request,
        "unauthorized.html",
        {"visitor": context.user},
        status_code=status.HTTP_403_FORBIDDEN,
    )
