"""Health check endpoints for the portal.

Reports whether the GraphQL backend answers a trivial query.
"""

import time
from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends

from manager_portal import __version__
from manager_portal.core.exceptions import PortalError
from manager_portal.graphql.gateway import GraphQLGateway
from manager_portal.web.dependencies import get_gateway
from manager_portal.web.models import HealthCheckResponse, HealthStatus

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Health"])

PING_QUERY = "query Ping { __typename }"


async def check_graphql_health(gateway: GraphQLGateway) -> HealthStatus:
    """Check GraphQL backend connectivity."""
    start_time = time.time()
    try:
        result = await gateway.execute(PING_QUERY)
        result.unwrap()
    except PortalError as e:
        latency = (time.time() - start_time) * 1000
        logger.error("graphql_health_check_failed", error=str(e))
        return HealthStatus(
            status="unhealthy",
            latency_ms=round(latency, 2),
            message=f"GraphQL backend unavailable: {e.message[:100]}",
        )

    latency = (time.time() - start_time) * 1000
    return HealthStatus(
        status="healthy",
        latency_ms=round(latency, 2),
        message="GraphQL backend reachable",
    )


@router.get(
    "/health",
    response_model=HealthCheckResponse,
    summary="Health Check",
    description="Check the portal and its GraphQL backend.",
)
async def health_check(
    gateway: GraphQLGateway = Depends(get_gateway),
) -> HealthCheckResponse:
    services = {"graphql": await check_graphql_health(gateway)}
    overall = "healthy" if services["graphql"].status == "healthy" else "degraded"

    return HealthCheckResponse(
        status=overall,
        version=__version__,
        timestamp=datetime.now(timezone.utc),
        services=services,
    )


@router.get(
    "/health/live",
    summary="Liveness Check",
)
async def liveness() -> dict:
    """Returns 200 if the process is alive."""
    return {"status": "alive", "timestamp": datetime.now(timezone.utc).isoformat()}
