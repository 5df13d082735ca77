"""Manager Portal - FastAPI Application.

This module builds the portal application:
- Public routes: sign-in, sign-out, unauthorized, health
- Protected routes: every page behind the session guard
- Session refresh middleware (sliding expiry)
- Exception handlers for guard redirects and unexpected errors

Usage:
    from manager_portal.web.app import create_app

    app = create_app()
    # uvicorn main:app --reload
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import structlog
from fastapi import APIRouter, Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from manager_portal import __version__
from manager_portal.assets.store import AssetStore, HttpAssetStore, LocalGraphQLAssetStore
from manager_portal.auth.guard import AuthContextProvider, GuardRedirect, GuardState, require_manager
from manager_portal.config.settings import Settings, get_settings
from manager_portal.graphql.gateway import GraphQLGateway
from manager_portal.web.routes import (
    account,
    auth,
    business_profile,
    complaints,
    dashboard,
    health,
    job_listings,
    products,
    reviews,
    upload,
)
from manager_portal.web.templating import build_templates

logger = structlog.get_logger(__name__)

APP_TITLE = "Manager Portal"


# =============================================================================
# Session Refresh Middleware
# =============================================================================


class SessionRefreshMiddleware(BaseHTTPMiddleware):
    """
    Re-issue the session cookie after every authorized request.

    ``require_manager`` leaves a fresh token on ``request.state``; this
    middleware writes it so an active manager's session keeps sliding.
    """

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        token = getattr(request.state, "refreshed_session", None)
        if token and not getattr(request.state, "session_cleared", False):
            settings: Settings = request.app.state.settings
            response.set_cookie(
                settings.session_cookie_name,
                token,
                max_age=settings.session_expire_minutes * 60,
                httponly=True,
                samesite="lax",
                secure=settings.session_cookie_secure,
            )
        return response


# =============================================================================
# Application Factory
# =============================================================================


def build_asset_store(settings: Settings, gateway: GraphQLGateway) -> AssetStore:
    if settings.upload_endpoint_url:
        return HttpAssetStore(settings.upload_endpoint_url)
    token = settings.upload_api_token.get_secret_value() if settings.upload_api_token else None
    return LocalGraphQLAssetStore(gateway, settings.upload_dir, bearer_token=token)


def create_app(
    settings: Optional[Settings] = None,
    gateway: Optional[GraphQLGateway] = None,
    asset_store: Optional[AssetStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Application settings. Defaults to get_settings().
        gateway: GraphQL gateway. Built from settings when omitted.
        asset_store: Upload backend for phase 1 of image attachment.

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()
    gateway = gateway or GraphQLGateway(settings.graphql_api_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info(
            "application_starting",
            environment=settings.app_env,
            version=__version__,
        )

        yield

        logger.info("application_stopping")
        await app.state.gateway.aclose()
        logger.info("application_stopped")

    app = FastAPI(
        title=APP_TITLE,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url=None,
    )

    # Application-wide state, set once here and injected by dependencies.
    app.state.settings = settings
    app.state.gateway = gateway
    app.state.asset_store = asset_store or build_asset_store(settings, gateway)
    app.state.auth_provider = AuthContextProvider(settings)
    app.state.templates = build_templates(settings.asset_base_url)

    app.add_middleware(SessionRefreshMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "Accept"],
    )

    _register_exception_handlers(app)

    # Public routes
    app.include_router(health.router)
    app.include_router(auth.router)

    # Every page below requires a manager session.
    protected = APIRouter(dependencies=[Depends(require_manager)])
    protected.include_router(dashboard.router)
    protected.include_router(business_profile.router)
    protected.include_router(products.router)
    protected.include_router(reviews.router)
    protected.include_router(complaints.router)
    protected.include_router(job_listings.router)
    protected.include_router(account.router)
    protected.include_router(upload.router)
    app.include_router(protected)

    @app.get("/", include_in_schema=False)
    async def root(request: Request) -> RedirectResponse:
        context = request.app.state.auth_provider.context_for(request)
        target = "/dashboard" if context.status is GuardState.AUTHORIZED else "/auth/signin"
        return RedirectResponse(target, status_code=status.HTTP_303_SEE_OTHER)

    return app


# =============================================================================
# Exception Handlers
# =============================================================================


def _register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(GuardRedirect)
    async def guard_redirect_handler(request: Request, exc: GuardRedirect):
        """Send unauthenticated or unauthorized visitors away before rendering."""
        if request.url.path.startswith("/api/"):
            code = (
                status.HTTP_401_UNAUTHORIZED
                if exc.decision.state is GuardState.UNAUTHENTICATED
                else status.HTTP_403_FORBIDDEN
            )
            return JSONResponse(status_code=code, content={"error": exc.user_message})
        return RedirectResponse(exc.location, status_code=status.HTTP_303_SEE_OTHER)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        settings: Settings = request.app.state.settings
        if request.url.path.startswith("/api/"):
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error": "internal_server_error",
                    "detail": str(exc) if settings.debug else None,
                },
            )
        templates = request.app.state.templates
        response: HTMLResponse = templates.TemplateResponse(
            request,
            "error.html",
            {
                "message": "An unexpected error occurred.",
                "detail": str(exc) if settings.debug else None,
            },
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
        return response
