"""Authentication: session tokens, credential sign-in and the session guard."""

from manager_portal.auth.guard import (
    AuthContext,
    AuthContextProvider,
    GuardDecision,
    GuardRedirect,
    GuardState,
    SessionGuard,
    get_auth_context,
    require_manager,
)
from manager_portal.auth.identity import IdentityService, SignInAttempt
from manager_portal.auth.session import (
    create_session_token,
    decode_session_token,
    read_session,
)

__all__ = [
    "AuthContext",
    "AuthContextProvider",
    "GuardDecision",
    "GuardRedirect",
    "GuardState",
    "IdentityService",
    "SessionGuard",
    "SignInAttempt",
    "create_session_token",
    "decode_session_token",
    "get_auth_context",
    "read_session",
    "require_manager",
]
