"""Form state: touched-only partial updates."""

from manager_portal.forms.business import (
    BASIC_PANEL,
    BUSINESS_PANEL,
    CONTACT_PANEL,
    FULL_PROFILE,
    ONLINE_PANEL,
    PANELS,
    BusinessProfileService,
)
from manager_portal.forms.controller import (
    ACCOUNT_FORM,
    JOB_LISTING_FORM,
    PRODUCT_FORM,
    EntityFormController,
    FormSchema,
    FormState,
)

__all__ = [
    "ACCOUNT_FORM",
    "BASIC_PANEL",
    "BUSINESS_PANEL",
    "CONTACT_PANEL",
    "FULL_PROFILE",
    "JOB_LISTING_FORM",
    "ONLINE_PANEL",
    "PANELS",
    "PRODUCT_FORM",
    "BusinessProfileService",
    "EntityFormController",
    "FormSchema",
    "FormState",
]
