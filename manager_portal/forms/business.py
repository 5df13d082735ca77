"""Business profile panels.

The profile page splits one Business across independent panels. Each panel
is its own FormSchema; all of them submit touched fields only.
"""

from typing import Any, Mapping, Optional

import structlog

from manager_portal.core.exceptions import ValidationError
from manager_portal.core.results import Result
from manager_portal.forms.controller import EntityFormController, FormSchema, FormState
from manager_portal.graphql import documents
from manager_portal.graphql.gateway import GraphQLGateway
from manager_portal.models.entities import Business

logger = structlog.get_logger(__name__)

_NUMERIC = {"yearFounded": int, "employeeCount": int}

BASIC_PANEL = FormSchema(
    name="business_basic",
    fields=("name", "industry", "yearFounded", "typeOfEntity", "description"),
    numeric={"yearFounded": int},
)

BUSINESS_PANEL = FormSchema(
    name="business_details",
    fields=("businessHours", "revenue", "employeeCount", "keywords"),
    numeric={"employeeCount": int},
)

CONTACT_PANEL = FormSchema(
    name="business_contact",
    fields=("contactEmail", "contactPhone", "website", "location", "address"),
)

ONLINE_PANEL = FormSchema(
    name="business_online",
    fields=("companyLinkedIn", "companyFacebook", "companyTwitter", "technologiesUsed", "sicCodes"),
)

FULL_PROFILE = FormSchema(
    name="business_profile",
    fields=BASIC_PANEL.fields + BUSINESS_PANEL.fields + CONTACT_PANEL.fields + ONLINE_PANEL.fields,
    numeric=_NUMERIC,
)

PANELS: dict[str, FormSchema] = {
    "basic": BASIC_PANEL,
    "business": BUSINESS_PANEL,
    "contact": CONTACT_PANEL,
    "online": ONLINE_PANEL,
    "full": FULL_PROFILE,
}


def panel(name: str) -> FormSchema:
    try:
        return PANELS[name]
    except KeyError:
        raise ValidationError(f"Unknown profile panel {name!r}", field="panel") from None


class BusinessProfileService:
    """Loads the manager's business and submits panel updates."""

    def __init__(self, gateway: GraphQLGateway):
        self._gateway = gateway

    async def load(self, user_id: str) -> Optional[Business]:
        """Return the manager's first business, or None if they have none."""
        result = await self._gateway.execute(
            documents.USER_BUSINESSES,
            {"where": {"id": user_id}},
        )
        user = result.unwrap().get("user") or {}
        businesses = user.get("businesses") or []
        if not businesses:
            logger.info("business_profile_missing", user_id=user_id)
            return None
        return Business.model_validate(businesses[0])

    async def update(self, business_id: str, data: dict[str, Any]) -> dict[str, Any]:
        result = await self._gateway.execute(
            documents.UPDATE_BUSINESS,
            {"where": {"id": business_id}, "data": data},
        )
        return result.unwrap()["updateBusiness"]

    async def submit_panel(
        self,
        business: Business,
        panel_name: str,
        posted: Mapping[str, Any],
    ) -> tuple[FormState, Result]:
        """
        Apply a posted panel to the loaded business and submit the delta.

        Returns the form state (for re-rendering) and the submit result.
        """
        controller = EntityFormController(panel(panel_name))
        state = controller.apply_form(controller.initialize(business), posted)
        outcome = await controller.submit(
            state,
            lambda data: self.update(business.id, data),
        )
        return state, outcome
