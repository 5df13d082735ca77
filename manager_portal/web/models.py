"""Pydantic models for the portal's JSON endpoints."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field


# =============================================================================
# Health Models
# =============================================================================


class HealthStatus(BaseModel):
    """Individual dependency health status."""

    status: Literal["healthy", "unhealthy", "degraded"] = Field(
        ..., description="Dependency status"
    )
    latency_ms: Optional[float] = Field(None, description="Response latency in milliseconds")
    message: Optional[str] = Field(None, description="Additional status message")


class HealthCheckResponse(BaseModel):
    """Response model for the health check endpoint."""

    status: Literal["healthy", "unhealthy", "degraded"] = Field(
        ..., description="Overall status"
    )
    version: str = Field(..., description="Portal version")
    timestamp: datetime = Field(..., description="Check timestamp")
    services: dict[str, HealthStatus] = Field(
        default_factory=dict,
        description="Individual dependency statuses",
    )


# =============================================================================
# Upload Models
# =============================================================================


class UploadedAsset(BaseModel):
    id: str


class UploadResponse(BaseModel):
    """Body returned by ``/api/upload``; the id is repeated under ``data``."""

    id: str = Field(..., description="Stored asset id")
    data: UploadedAsset

    @classmethod
    def for_asset(cls, asset_id: str) -> "UploadResponse":
        return cls(id=asset_id, data=UploadedAsset(id=asset_id))


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str = Field(..., description="Human-readable error message")
