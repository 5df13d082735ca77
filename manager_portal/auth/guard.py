"""Session Guard and the authenticated-context provider.

Every protected page is mounted on a router that depends on
``require_manager``. The guard resolves once per request from LOADING to
one of the three terminal states; only AUTHORIZED renders anything.

States:
- LOADING: session not yet read
- UNAUTHENTICATED: no valid session -> redirect to the sign-in page
- UNAUTHORIZED: valid session, role is not manager -> redirect to /unauthorized
- AUTHORIZED: manager session -> render the page
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import structlog
from fastapi import Request

from manager_portal.auth.session import create_session_token, read_session
from manager_portal.config.settings import Settings
from manager_portal.core.exceptions import AuthorizationError
from manager_portal.models.entities import SessionUser

logger = structlog.get_logger(__name__)

SIGN_IN_PATH = "/auth/signin"
UNAUTHORIZED_PATH = "/unauthorized"


class GuardState(Enum):
    """Observable guard states."""

    LOADING = "loading"
    UNAUTHENTICATED = "unauthenticated"
    UNAUTHORIZED = "authenticated-unauthorized"
    AUTHORIZED = "authenticated-authorized"


@dataclass(frozen=True)
class GuardDecision:
    state: GuardState
    user: Optional[SessionUser] = None
    redirect_to: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.state is GuardState.AUTHORIZED


class SessionGuard:
    """
    One-shot guard for a single page mount.

    Example:
        guard = SessionGuard()
        decision = guard.resolve(session_user)
        if not decision.allowed:
            return redirect(decision.redirect_to)
    """

    def __init__(self, required_role: str = "manager"):
        self.required_role = required_role
        self._state = GuardState.LOADING

    @property
    def state(self) -> GuardState:
        return self._state

    def resolve(self, user: Optional[SessionUser]) -> GuardDecision:
        """Move from LOADING to a terminal state for the given session."""
        if self._state is not GuardState.LOADING:
            raise RuntimeError(f"Guard already resolved to {self._state.value}")

        if user is None:
            self._state = GuardState.UNAUTHENTICATED
            return GuardDecision(self._state, redirect_to=SIGN_IN_PATH)

        if user.role != self.required_role:
            self._state = GuardState.UNAUTHORIZED
            return GuardDecision(self._state, user=user, redirect_to=UNAUTHORIZED_PATH)

        self._state = GuardState.AUTHORIZED
        return GuardDecision(self._state, user=user)


class GuardRedirect(AuthorizationError):
    """Raised by ``require_manager`` to short-circuit a protected page."""

    def __init__(self, decision: GuardDecision):
        self.decision = decision
        super().__init__(
            f"Session guard redirect: {decision.state.value}",
            {"redirect_to": decision.redirect_to},
        )

    @property
    def location(self) -> str:
        return self.decision.redirect_to or SIGN_IN_PATH


@dataclass(frozen=True)
class AuthContext:
    """What every page may know about the visitor."""

    status: GuardState
    user: Optional[SessionUser] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


class AuthContextProvider:
    """
    Application-wide source of authentication state.

    Created once by ``create_app`` and stored on ``app.state``.
    Nothing is cached between requests; each call re-reads the cookie.
    """

    def __init__(self, settings: Settings):
        self._settings = settings

    @property
    def cookie_name(self) -> str:
        return self._settings.session_cookie_name

    def session_for(self, request: Request) -> Optional[SessionUser]:
        return read_session(request.cookies.get(self.cookie_name), self._settings)

    def context_for(self, request: Request) -> AuthContext:
        user = self.session_for(request)
        if user is None:
            return AuthContext(GuardState.UNAUTHENTICATED)
        if not user.is_manager:
            return AuthContext(GuardState.UNAUTHORIZED, user)
        return AuthContext(GuardState.AUTHORIZED, user)

    def guard(self, request: Request) -> GuardDecision:
        return SessionGuard().resolve(self.session_for(request))

    def issue_token(self, user: SessionUser) -> str:
        return create_session_token(user, self._settings)


def get_auth_provider(request: Request) -> AuthContextProvider:
    return request.app.state.auth_provider


def get_auth_context(request: Request) -> AuthContext:
    """FastAPI dependency: authentication state for any page."""
    return get_auth_provider(request).context_for(request)


def require_manager(request: Request) -> SessionUser:
    """
    FastAPI dependency for protected routers.

    Raises:
        GuardRedirect: The visitor is not a signed-in manager.
    """
    provider = get_auth_provider(request)
    decision = provider.guard(request)

    if not decision.allowed:
        logger.info(
            "session_guard_redirect",
            path=request.url.path,
            state=decision.state.value,
        )
        raise GuardRedirect(decision)

    # Renewed by SessionRefreshMiddleware after the response is built.
    request.state.refreshed_session = provider.issue_token(decision.user)
    request.state.user = decision.user
    return decision.user
