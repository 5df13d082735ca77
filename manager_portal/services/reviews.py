"""Business review commands."""

from manager_portal.graphql import documents
from manager_portal.listings.mass_delete import MassDeleteManager
from manager_portal.models.entities import Review
from manager_portal.services.base import (
    GatewayService,
    business_children,
    require_entity,
    user_where,
)


class ReviewsService(GatewayService):

    async def list_reviews(self, user_id: str) -> list[Review]:
        """All reviews across the manager's businesses, in fetch order."""
        data = await self._fetch(documents.USER_REVIEWS, user_where(user_id))
        return [Review.model_validate(r) for r in business_children(data, "reviews")]

    async def get_review(self, review_id: str) -> Review:
        data = await self._fetch(documents.REVIEW, {"where": {"id": review_id}})
        return Review.model_validate(require_entity(data, "review", review_id))

    def mass_delete(self, user_id: str) -> MassDeleteManager[list[Review]]:
        return MassDeleteManager(
            self._gateway,
            documents.DELETE_REVIEW,
            "reviews",
            refetch=lambda: self.list_reviews(user_id),
        )
