"""Business complaint commands."""

from manager_portal.graphql import documents
from manager_portal.listings.mass_delete import MassDeleteManager
from manager_portal.models.entities import Complaint
from manager_portal.services.base import (
    GatewayService,
    business_children,
    require_entity,
    user_where,
)


class ComplaintsService(GatewayService):

    async def list_complaints(self, user_id: str) -> list[Complaint]:
        data = await self._fetch(documents.USER_COMPLAINTS, user_where(user_id))
        return [Complaint.model_validate(c) for c in business_children(data, "complaints")]

    async def get_complaint(self, complaint_id: str) -> Complaint:
        data = await self._fetch(documents.COMPLAINT, {"where": {"id": complaint_id}})
        return Complaint.model_validate(require_entity(data, "complaint", complaint_id))

    def mass_delete(self, user_id: str) -> MassDeleteManager[list[Complaint]]:
        return MassDeleteManager(
            self._gateway,
            documents.DELETE_COMPLAINT,
            "complaints",
            refetch=lambda: self.list_complaints(user_id),
        )
