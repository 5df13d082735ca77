"""Entity models and status enumerations."""

from manager_portal.models.entities import (
    Account,
    ApiModel,
    Business,
    BusinessRef,
    Complaint,
    Image,
    ImageFile,
    JobListing,
    Product,
    Reply,
    Review,
    SessionUser,
    UserRef,
)
from manager_portal.models.status import ComplaintStatus, ReviewModeration

__all__ = [
    "Account",
    "ApiModel",
    "Business",
    "BusinessRef",
    "Complaint",
    "ComplaintStatus",
    "Image",
    "ImageFile",
    "JobListing",
    "Product",
    "Reply",
    "Review",
    "ReviewModeration",
    "SessionUser",
    "UserRef",
]
