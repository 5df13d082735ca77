"""Unit tests for sessions, sign-in and the session guard."""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from manager_portal.auth.guard import (
    SIGN_IN_PATH,
    UNAUTHORIZED_PATH,
    GuardState,
    SessionGuard,
)
from manager_portal.auth.identity import IdentityService
from manager_portal.auth.session import create_session_token, decode_session_token, read_session
from manager_portal.core.exceptions import AuthorizationError, ValidationError


def auth_response(role: str = "manager") -> dict:
    return {
        "data": {
            "authenticateUserWithPassword": {
                "__typename": "UserAuthenticationWithPasswordSuccess",
                "item": {"id": "user-1", "email": "morgan@example.com", "name": "Morgan", "role": role},
            }
        }
    }


class TestSessionToken:
    """Test JWT session tokens."""

    def test_round_trip(self, settings, manager):
        token = create_session_token(manager, settings)

        assert read_session(token, settings) == manager
        payload = decode_session_token(token, settings)
        assert payload["sub"] == "user-1"
        assert payload["role"] == "manager"

    def test_missing_or_garbage_token(self, settings):
        assert read_session(None, settings) is None
        assert read_session("not-a-jwt", settings) is None

    def test_expired_token_rejected(self, settings):
        past = datetime.now(timezone.utc) - timedelta(hours=2)
        token = jwt.encode(
            {"sub": "user-1", "role": "manager", "exp": past, "iat": past},
            settings.session_secret.get_secret_value(),
            algorithm=settings.session_algorithm,
        )

        assert read_session(token, settings) is None

    def test_wrong_secret_rejected(self, settings, manager):
        token = jwt.encode({"sub": manager.id, "role": "manager"}, "another-secret", algorithm="HS256")

        assert read_session(token, settings) is None

    def test_missing_fields_fall_back(self, settings):
        token = jwt.encode(
            {"sub": "user-9"},
            settings.session_secret.get_secret_value(),
            algorithm=settings.session_algorithm,
        )

        user = read_session(token, settings)
        assert user.name == "N/A"
        assert user.role == "guest"


class TestSessionGuard:
    """Test guard state transitions."""

    def test_starts_loading(self):
        assert SessionGuard().state is GuardState.LOADING

    def test_no_session_redirects_to_sign_in(self):
        decision = SessionGuard().resolve(None)

        assert decision.state is GuardState.UNAUTHENTICATED
        assert decision.redirect_to == SIGN_IN_PATH
        assert not decision.allowed

    def test_customer_redirected_to_unauthorized(self, customer):
        decision = SessionGuard().resolve(customer)

        assert decision.state is GuardState.UNAUTHORIZED
        assert decision.redirect_to == UNAUTHORIZED_PATH
        assert not decision.allowed

    def test_manager_authorized(self, manager):
        decision = SessionGuard().resolve(manager)

        assert decision.allowed
        assert decision.user == manager
        assert decision.redirect_to is None

    def test_resolves_only_once(self, manager):
        guard = SessionGuard()
        guard.resolve(manager)

        with pytest.raises(RuntimeError):
            guard.resolve(manager)


class TestIdentityService:
    """Test sign-in against the GraphQL stub."""

    @pytest.mark.asyncio
    async def test_manager_signs_in(self, gateway, graphql_stub):
        graphql_stub.on("AuthenticateUser", auth_response())

        user = await IdentityService(gateway).authenticate("morgan@example.com", "pw")

        assert user.id == "user-1"
        assert user.is_manager
        assert graphql_stub.calls[0].variables == {"email": "morgan@example.com", "password": "pw"}

    @pytest.mark.asyncio
    async def test_non_manager_rejected(self, gateway, graphql_stub):
        graphql_stub.on("AuthenticateUser", auth_response(role="customer"))

        with pytest.raises(AuthorizationError):
            await IdentityService(gateway).authenticate("casey@example.com", "pw")

    @pytest.mark.asyncio
    async def test_failure_member_rejected(self, gateway, graphql_stub):
        graphql_stub.on(
            "AuthenticateUser",
            {
                "data": {
                    "authenticateUserWithPassword": {
                        "__typename": "UserAuthenticationWithPasswordFailure",
                        "message": "Authentication failed.",
                    }
                }
            },
        )

        attempt = await IdentityService(gateway).sign_in("morgan@example.com", "wrong")

        assert not attempt.ok
        assert attempt.error == "Authentication failed."

    @pytest.mark.asyncio
    async def test_missing_credentials_make_no_call(self, gateway, graphql_stub):
        with pytest.raises(ValidationError):
            await IdentityService(gateway).authenticate("", "")

        assert graphql_stub.calls == []

    @pytest.mark.asyncio
    async def test_backend_error_becomes_generic_message(self, gateway, graphql_stub):
        graphql_stub.on("AuthenticateUser", {"errors": [{"message": "database down"}]})

        attempt = await IdentityService(gateway).sign_in("morgan@example.com", "pw")

        assert not attempt.ok
        assert "unavailable" in attempt.error
