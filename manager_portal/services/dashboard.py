"""Dashboard summary counts, computed from a fresh fetch."""

from dataclasses import dataclass

from manager_portal.graphql import documents
from manager_portal.models.status import ComplaintStatus, ReviewModeration
from manager_portal.services.base import GatewayService, user_where


@dataclass(frozen=True)
class DashboardSummary:
    businesses: int = 0
    products: int = 0
    job_listings: int = 0
    reviews: int = 0
    pending_reviews: int = 0
    complaints: int = 0
    unresolved_complaints: int = 0


class DashboardService(GatewayService):

    async def summary(self, user_id: str) -> DashboardSummary:
        data = await self._fetch(documents.DASHBOARD_SUMMARY, user_where(user_id))
        businesses = (data.get("user") or {}).get("businesses") or []

        reviews = [r for b in businesses for r in b.get("reviews") or []]
        complaints = [c for b in businesses for c in b.get("complaints") or []]

        return DashboardSummary(
            businesses=len(businesses),
            products=sum(len(b.get("products") or []) for b in businesses),
            job_listings=sum(len(b.get("jobListings") or []) for b in businesses),
            reviews=len(reviews),
            pending_reviews=sum(
                1 for r in reviews
                if ReviewModeration.from_wire(r.get("moderationStatus") or "2") is ReviewModeration.PENDING
            ),
            complaints=len(complaints),
            unresolved_complaints=sum(
                1 for c in complaints
                if ComplaintStatus.from_wire(c.get("status") or "1") is ComplaintStatus.UNRESOLVED
            ),
        )
