"""Job listing commands: list, edit, mass delete."""

from typing import Any, Mapping

import structlog

from manager_portal.core.results import Result
from manager_portal.forms.controller import JOB_LISTING_FORM, EntityFormController, FormState
from manager_portal.graphql import documents
from manager_portal.listings.mass_delete import MassDeleteManager
from manager_portal.models.entities import JobListing
from manager_portal.services.base import (
    GatewayService,
    business_children,
    require_entity,
    user_where,
)

logger = structlog.get_logger(__name__)


class JobListingsService(GatewayService):

    async def list_job_listings(self, user_id: str) -> list[JobListing]:
        data = await self._fetch(documents.USER_JOB_LISTINGS, user_where(user_id))
        return [JobListing.model_validate(j) for j in business_children(data, "jobListings")]

    async def update_job_listing(self, job_id: str, data: dict[str, Any]) -> dict[str, Any]:
        result = await self._fetch(
            documents.UPDATE_JOB_LISTING,
            {"where": {"id": job_id}, "data": data},
        )
        logger.info("job_listing_updated", job_id=job_id, fields=sorted(data))
        return require_entity(result, "updateJobListing", job_id)

    async def submit_edit(
        self,
        job: JobListing,
        posted: Mapping[str, Any],
    ) -> tuple[FormState, Result]:
        """Send the touched fields of an inline job edit; salary must be numeric."""
        controller = EntityFormController(JOB_LISTING_FORM)
        state = controller.apply_form(controller.initialize(job), posted)
        outcome = await controller.submit(
            state,
            lambda data: self.update_job_listing(job.id, data),
        )
        return state, outcome

    def mass_delete(self, user_id: str) -> MassDeleteManager[list[JobListing]]:
        return MassDeleteManager(
            self._gateway,
            documents.DELETE_JOB_LISTING,
            "job listings",
            refetch=lambda: self.list_job_listings(user_id),
        )
