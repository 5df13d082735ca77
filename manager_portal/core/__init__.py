"""
Core infrastructure modules for the Manager Portal.

Provides common utilities used across the application:
- exceptions: Error taxonomy shared by every module
- results: Ok / Err results returned by command objects
- logging: structlog configuration
"""

from manager_portal.core.exceptions import (
    PortalError,
    TransportError,
    ProtocolError,
    ApiError,
    ValidationError,
    UploadError,
    LinkError,
    AuthorizationError,
    ConfigurationError,
)

from manager_portal.core.results import (
    Ok,
    Err,
    Result,
    run_command,
)

__all__ = [
    # Exceptions
    "PortalError",
    "TransportError",
    "ProtocolError",
    "ApiError",
    "ValidationError",
    "UploadError",
    "LinkError",
    "AuthorizationError",
    "ConfigurationError",
    # Results
    "Ok",
    "Err",
    "Result",
    "run_command",
]
