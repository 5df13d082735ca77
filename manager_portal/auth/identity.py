"""Credential sign-in against the GraphQL backend.

The backend verifies the password; the portal only accepts the result when
the user's role is "manager".
"""

from dataclasses import dataclass
from typing import Optional

import structlog

from manager_portal.core.exceptions import AuthorizationError, PortalError, ValidationError
from manager_portal.graphql import documents
from manager_portal.graphql.gateway import GraphQLGateway
from manager_portal.models.entities import SessionUser

logger = structlog.get_logger(__name__)

MANAGER_ROLE = "manager"

_SUCCESS_TYPE = "UserAuthenticationWithPasswordSuccess"
_FAILURE_TYPE = "UserAuthenticationWithPasswordFailure"


@dataclass(frozen=True)
class SignInAttempt:
    """Outcome of a sign-in: a user, or a message to show on the form."""

    user: Optional[SessionUser] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.user is not None


class IdentityService:
    """Authenticates managers with email and password."""

    def __init__(self, gateway: GraphQLGateway):
        self._gateway = gateway

    async def authenticate(self, email: str, password: str) -> SessionUser:
        """
        Verify credentials and return the session user.

        Raises:
            ValidationError: Email or password missing.
            AuthorizationError: Credentials rejected or the role is not manager.
            TransportError, ProtocolError, ApiError: Gateway failures.
        """
        email = (email or "").strip()
        if not email or not password:
            raise ValidationError("Email and password are required.", field="email")

        result = await self._gateway.execute(
            documents.AUTHENTICATE_USER,
            {"email": email, "password": password},
        )
        outcome = result.unwrap().get("authenticateUserWithPassword") or {}

        if outcome.get("__typename") == _FAILURE_TYPE or "item" not in outcome:
            logger.info("sign_in_rejected", reason=outcome.get("message"))
            raise AuthorizationError(outcome.get("message") or "Invalid email or password.")

        item = outcome["item"] or {}
        user = SessionUser(
            id=str(item.get("id") or ""),
            email=item.get("email") or "",
            name=item.get("name") or "N/A",
            role=item.get("role") or "guest",
        )

        if not user.is_manager:
            logger.warning("sign_in_role_denied", user_id=user.id, role=user.role)
            raise AuthorizationError("Access denied: only managers may sign in.")

        logger.info("sign_in_succeeded", user_id=user.id)
        return user

    async def sign_in(self, email: str, password: str) -> SignInAttempt:
        """Authenticate and fold every failure into a form message."""
        try:
            return SignInAttempt(user=await self.authenticate(email, password))
        except (ValidationError, AuthorizationError) as e:
            return SignInAttempt(error=e.message)
        except PortalError as e:
            logger.error("sign_in_failed", error_type=type(e).__name__, error=str(e))
            return SignInAttempt(error="Sign-in is unavailable right now. Please try again.")
