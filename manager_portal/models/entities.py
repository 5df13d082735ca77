"""Pydantic models for the entities the portal reads from the API.

The API owns every entity; these are transient copies valid until the next
fetch. Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from manager_portal.models.status import ComplaintStatus, ReviewModeration


# =============================================================================
# Base Model
# =============================================================================


class ApiModel(BaseModel):
    """Base model mapping snake_case attributes to camelCase API fields."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump using API field names."""
        return self.model_dump(by_alias=True, mode="json")


# =============================================================================
# Users and Sessions
# =============================================================================


class SessionUser(ApiModel):
    """The signed-in user as carried by the session token."""

    id: str
    name: str = "N/A"
    email: str = ""
    role: str = "guest"

    @property
    def is_manager(self) -> bool:
        return self.role == "manager"


class UserRef(ApiModel):
    """Author of a review or complaint."""

    id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None


class Account(ApiModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None


# =============================================================================
# Business
# =============================================================================


class Business(ApiModel):
    """A business owned by a manager."""

    id: str
    name: Optional[str] = None
    description: Optional[str] = None
    industry: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    address: Optional[str] = None
    year_founded: Optional[int] = None
    type_of_entity: Optional[str] = None
    business_hours: Optional[str] = None
    revenue: Optional[str] = None
    employee_count: Optional[int] = None
    keywords: Optional[str] = None
    company_linked_in: Optional[str] = Field(default=None, alias="companyLinkedIn")
    company_facebook: Optional[str] = None
    company_twitter: Optional[str] = None
    technologies_used: Optional[str] = None
    sic_codes: Optional[str] = None


class BusinessRef(ApiModel):
    id: str
    name: Optional[str] = None


# =============================================================================
# Replies, Reviews and Complaints
# =============================================================================


class Reply(ApiModel):
    id: str
    content: str = ""
    created_at: Optional[datetime] = None


def _coerce_bool(value: Any) -> bool:
    # The API has returned both booleans and "true"/"false" strings.
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


class Review(ApiModel):
    """A business review or a product review."""

    id: str
    user: Optional[UserRef] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    content: Optional[str] = None
    moderation_status: ReviewModeration = ReviewModeration.PENDING
    is_anonymous: bool = False
    created_at: Optional[datetime] = None
    replies: list[Reply] = Field(default_factory=list)

    @field_validator("moderation_status", mode="before")
    @classmethod
    def _parse_status(cls, value: Any) -> ReviewModeration:
        if value is None:
            return ReviewModeration.initial()
        return ReviewModeration.from_wire(value)

    @field_validator("is_anonymous", mode="before")
    @classmethod
    def _parse_anonymous(cls, value: Any) -> bool:
        return _coerce_bool(value)

    @property
    def author_name(self) -> str:
        if self.is_anonymous:
            return "Anonymous"
        return (self.user.name if self.user else None) or "No Name"


class Complaint(ApiModel):
    """A business complaint or a product complaint."""

    id: str
    user: Optional[UserRef] = None
    subject: Optional[str] = None
    content: Optional[str] = None
    status: ComplaintStatus = ComplaintStatus.UNRESOLVED
    is_anonymous: bool = False
    created_at: Optional[datetime] = None
    replies: list[Reply] = Field(default_factory=list)

    @field_validator("status", mode="before")
    @classmethod
    def _parse_status(cls, value: Any) -> ComplaintStatus:
        if value is None:
            return ComplaintStatus.initial()
        return ComplaintStatus.from_wire(value)

    @field_validator("is_anonymous", mode="before")
    @classmethod
    def _parse_anonymous(cls, value: Any) -> bool:
        return _coerce_bool(value)

    @property
    def author_name(self) -> str:
        if self.is_anonymous:
            return "Anonymous"
        return (self.user.name if self.user else None) or "No Name"


# =============================================================================
# Products and Images
# =============================================================================


class ImageFile(ApiModel):
    url: Optional[str] = None
    filesize: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    extension: Optional[str] = None


class Image(ApiModel):
    id: str
    file: Optional[ImageFile] = None


class Product(ApiModel):
    """A product listed by a business."""

    id: str
    name: Optional[str] = None
    description: Optional[str] = None
    business: Optional[BusinessRef] = None
    images: list[Image] = Field(default_factory=list)
    reviews: list[Review] = Field(default_factory=list)
    complaints: list[Complaint] = Field(default_factory=list)

    @property
    def average_rating(self) -> Optional[float]:
        ratings = [r.rating for r in self.reviews if r.rating is not None]
        if not ratings:
            return None
        return round(sum(ratings) / len(ratings), 1)


# =============================================================================
# Job Listings
# =============================================================================


class JobListing(ApiModel):
    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    salary: Optional[float] = None
    created_at: Optional[datetime] = None
