"""
Page-level command objects.

Each service takes the GraphQL gateway and exposes coroutines with declared
inputs and typed outputs, so pages stay thin and commands are testable
without HTTP.
"""

from manager_portal.services.account import AccountService
from manager_portal.services.complaints import ComplaintsService
from manager_portal.services.dashboard import DashboardService, DashboardSummary
from manager_portal.services.job_listings import JobListingsService
from manager_portal.services.products import ProductsService
from manager_portal.services.reviews import ReviewsService

__all__ = [
    "AccountService",
    "ComplaintsService",
    "DashboardService",
    "DashboardSummary",
    "JobListingsService",
    "ProductsService",
    "ReviewsService",
]
