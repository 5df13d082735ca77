"""
Core exception hierarchy for the Manager Portal.

Every failure that crosses a module boundary is one of these types. Page
handlers catch PortalError, log it and render a short inline message.
"""

from typing import Any, Optional


# =============================================================================
# Base Exception
# =============================================================================


class PortalError(Exception):
    """Base exception for all portal errors."""

    user_message = "Something went wrong. Please try again."

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# Gateway Errors
# =============================================================================


class TransportError(PortalError):
    """Raised when the GraphQL endpoint cannot be reached."""

    user_message = "The server could not be reached. Check your connection."


class ProtocolError(PortalError):
    """Raised on a non-2xx status or a body that is not a JSON object."""

    user_message = "The server returned an unexpected response."

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.status_code = status_code
        details = dict(details or {})
        if status_code is not None:
            details.setdefault("status_code", status_code)
        super().__init__(message, details)


class ApiError(PortalError):
    """Raised when the GraphQL API reports errors in an otherwise valid response."""

    user_message = "The server rejected the request."

    def __init__(self, messages: list[str], operation: Optional[str] = None):
        self.messages = list(messages)
        self.operation = operation
        summary = "; ".join(self.messages) or "Unknown GraphQL error"
        details = {"operation": operation} if operation else None
        super().__init__(summary, details)


# =============================================================================
# Client-side Errors
# =============================================================================


class ValidationError(PortalError):
    """Raised when input cannot be coerced or is outside an allowed set."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        details = {"field": field} if field else None
        super().__init__(message, details)

    @property
    def user_message(self) -> str:  # type: ignore[override]
        return self.message


class UploadError(PortalError):
    """Raised when an asset cannot be stored (phase 1 of an attachment)."""

    user_message = "The image could not be uploaded."


class LinkError(PortalError):
    """
    Raised when a stored asset cannot be linked to its owner (phase 2).

    The asset from phase 1 stays orphaned; nothing removes it.
    """

    user_message = "The image was uploaded but could not be attached to the product."

    def __init__(self, message: str, asset_id: str, details: Optional[dict[str, Any]] = None):
        self.asset_id = asset_id
        details = dict(details or {})
        details.setdefault("asset_id", asset_id)
        super().__init__(message, details)


class AuthorizationError(PortalError):
    """Raised when there is no session or the session role is not allowed."""

    user_message = "You are not allowed to access this page."


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(PortalError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        self.config_key = config_key
        details = {"config_key": config_key} if config_key else None
        super().__init__(message, details)
