"""FastAPI dependency injection providers.

Everything here reads from ``app.state``, which ``create_app`` fills once at
the application root. Nothing is stored in module-level globals.
"""

from fastapi import Request

from manager_portal.assets.attachment import AssetAttachmentFlow
from manager_portal.assets.store import AssetStore
from manager_portal.auth.identity import IdentityService
from manager_portal.config.settings import Settings
from manager_portal.forms.business import BusinessProfileService
from manager_portal.graphql.gateway import GraphQLGateway
from manager_portal.moderation.service import ModerationService
from manager_portal.services import (
    AccountService,
    ComplaintsService,
    DashboardService,
    JobListingsService,
    ProductsService,
    ReviewsService,
)


def get_settings_state(request: Request) -> Settings:
    return request.app.state.settings


def get_gateway(request: Request) -> GraphQLGateway:
    """
    Get the application's GraphQL gateway.

    Returns:
        The gateway created in ``create_app``.
    """
    return request.app.state.gateway


def get_asset_store(request: Request) -> AssetStore:
    return request.app.state.asset_store


def get_identity_service(request: Request) -> IdentityService:
    return IdentityService(get_gateway(request))


def get_business_service(request: Request) -> BusinessProfileService:
    return BusinessProfileService(get_gateway(request))


def get_products_service(request: Request) -> ProductsService:
    return ProductsService(get_gateway(request))


def get_reviews_service(request: Request) -> ReviewsService:
    return ReviewsService(get_gateway(request))


def get_complaints_service(request: Request) -> ComplaintsService:
    return ComplaintsService(get_gateway(request))


def get_job_listings_service(request: Request) -> JobListingsService:
    return JobListingsService(get_gateway(request))


def get_account_service(request: Request) -> AccountService:
    return AccountService(get_gateway(request))


def get_dashboard_service(request: Request) -> DashboardService:
    return DashboardService(get_gateway(request))


def get_moderation_service(request: Request) -> ModerationService:
    return ModerationService(get_gateway(request))


def get_attachment_flow(request: Request) -> AssetAttachmentFlow:
    return AssetAttachmentFlow(get_asset_store(request), get_gateway(request))
