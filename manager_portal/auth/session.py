"""
JWT session management.

The session token is the only client-held state: a signed JWT carrying the
user's id, email, name and role.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import structlog
from jose import JWTError, jwt

from manager_portal.config.settings import Settings, get_settings
from manager_portal.models.entities import SessionUser

logger = structlog.get_logger(__name__)


def create_session_token(user: SessionUser, settings: Optional[Settings] = None) -> str:
    """
    Create a signed session token for a user.

    Args:
        user: Authenticated user.
        settings: Application settings. Defaults to get_settings().

    Returns:
        JWT token string
    """
    settings = settings or get_settings()
    now = datetime.now(timezone.utc)
    expire = now + timedelta(minutes=settings.session_expire_minutes)

    payload = {
        "sub": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role,
        "exp": expire,
        "iat": now,
    }

    return jwt.encode(
        payload,
        settings.session_secret.get_secret_value(),
        algorithm=settings.session_algorithm,
    )


def decode_session_token(token: str, settings: Optional[Settings] = None) -> dict:
    """
    Decode and validate a session token.

    Returns:
        Decoded payload dict

    Raises:
        jose.JWTError if token invalid/expired
    """
    settings = settings or get_settings()
    return jwt.decode(
        token,
        settings.session_secret.get_secret_value(),
        algorithms=[settings.session_algorithm],
    )


def read_session(token: Optional[str], settings: Optional[Settings] = None) -> Optional[SessionUser]:
    """
    Return the session user for a token, or None when absent or invalid.

    Missing fields fall back the same way sign-in does: name "N/A", role "guest".
    """
    if not token:
        return None

    try:
        payload = decode_session_token(token, settings)
    except JWTError as e:
        logger.info("session_token_rejected", error=str(e))
        return None

    user_id = payload.get("sub")
    if not user_id:
        return None

    return SessionUser(
        id=str(user_id),
        email=payload.get("email") or "",
        name=payload.get("name") or "N/A",
        role=payload.get("role") or "guest",
    )
