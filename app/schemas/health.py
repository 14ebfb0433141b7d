"""Health check API schemas."""

from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel


class HealthResponse(CamelModel):
    """Response for GET /api/health (liveness)."""

    status: str = Field(default="healthy", description="Service status")
    timestamp: datetime
    version: str
