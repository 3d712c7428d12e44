"""Health check API schemas."""

from datetime import UTC, datetime

from pydantic import Field

from accounts.schemas.base import CamelModel


class HealthResponse(CamelModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")
    service: str = Field(..., description="Service name")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
