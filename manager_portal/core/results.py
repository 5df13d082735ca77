"""Tagged results for command objects.

Commands never raise for expected failures; they return ``Ok`` or ``Err``
so page handlers and tests can branch on the outcome without try blocks.
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, TypeVar, Union

import structlog

from manager_portal.core.exceptions import PortalError

logger = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful command outcome."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed command outcome carrying the error that caused it."""

    error: PortalError

    @property
    def ok(self) -> bool:
        return False

    @property
    def kind(self) -> str:
        """Error kind, e.g. ``"ApiError"`` or ``"ValidationError"``."""
        return type(self.error).__name__

    @property
    def message(self) -> str:
        return self.error.user_message


Result = Union[Ok[T], Err]


async def run_command(name: str, action: Callable[[], Awaitable[T]]) -> "Result[T]":
    """
    Await ``action`` and wrap its outcome.

    Portal errors become ``Err`` and are logged under ``name``; anything else
    propagates.
    """
    try:
        return Ok(await action())
    except PortalError as e:
        logger.warning(
            "command_failed",
            command=name,
            error_type=type(e).__name__,
            error=str(e),
        )
        return Err(e)
