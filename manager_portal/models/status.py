"""Closed status enumerations and their wire tokens.

The API encodes statuses as small string tokens ("0", "1", "2"). This module
is the only place that knows those tokens; everything else works with the
enums below.
"""

from enum import Enum
from typing import Union

from manager_portal.core.exceptions import ValidationError


class ReviewModeration(str, Enum):
    """Moderation state of a review or product review.

    Any state may move to any other; managers can always revise a decision.
    """

    APPROVED = "0"
    DENIED = "1"
    PENDING = "2"

    @classmethod
    def initial(cls) -> "ReviewModeration":
        return cls.PENDING

    @classmethod
    def from_wire(cls, token: Union[str, "ReviewModeration"]) -> "ReviewModeration":
        """Parse a wire token; anything outside the set raises ValidationError."""
        return _parse(cls, token, "moderationStatus")

    def to_wire(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return _REVIEW_LABELS[self]


class ComplaintStatus(str, Enum):
    """Resolution state of a complaint or product complaint."""

    RESOLVED = "0"
    UNRESOLVED = "1"

    @classmethod
    def initial(cls) -> "ComplaintStatus":
        return cls.UNRESOLVED

    @classmethod
    def from_wire(cls, token: Union[str, "ComplaintStatus"]) -> "ComplaintStatus":
        """Parse a wire token; anything outside the set raises ValidationError."""
        return _parse(cls, token, "status")

    def to_wire(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return _COMPLAINT_LABELS[self]

    def toggled(self) -> "ComplaintStatus":
        if self is ComplaintStatus.RESOLVED:
            return ComplaintStatus.UNRESOLVED
        return ComplaintStatus.RESOLVED


_REVIEW_LABELS = {
    ReviewModeration.APPROVED: "Approved",
    ReviewModeration.DENIED: "Denied",
    ReviewModeration.PENDING: "Pending Approval",
}

_COMPLAINT_LABELS = {
    ComplaintStatus.RESOLVED: "Closed",
    ComplaintStatus.UNRESOLVED: "Pending",
}


def _parse(enum_cls, token, field: str):
    if isinstance(token, enum_cls):
        return token
    if isinstance(token, Enum):
        raise ValidationError(
            f"{field} expects a {enum_cls.__name__}, got {type(token).__name__}.{token.name}",
            field=field,
        )
    if not isinstance(token, str):
        raise ValidationError(
            f"{field} must be one of {[m.value for m in enum_cls]}, got {token!r}",
            field=field,
        )
    try:
        return enum_cls(token)
    except ValueError:
        raise ValidationError(
            f"{field} must be one of {[m.value for m in enum_cls]}, got {token!r}",
            field=field,
        ) from None
