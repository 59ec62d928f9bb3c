"""Health check schemas."""

from pydantic import Field

from social.enums import HealthStatus
from social.schemas.base_schema_model import BaseSchemaModel


class DependencyHealth(BaseSchemaModel):
    """Health status for a single dependency."""

    healthy: bool = Field(..., description="Whether the dependency is healthy")
    status: HealthStatus = Field(..., description="Health status of the dependency")
    message: str = Field(..., description="Human-readable health message")
    response_time_ms: float | None = Field(
        None, description="Response time in milliseconds"
    )


class LivenessResponse(BaseSchemaModel):
    """Response model for liveness checks."""

    status: str = Field(..., description="Liveness status")


class ReadinessResponse(BaseSchemaModel):
    """Response model for readiness checks."""

    ready: bool = Field(..., description="Service is ready to serve requests")
    status: str = Field(..., description="'ready' or 'degraded'")
    degraded: bool = Field(..., description="Whether a dependency is down")
    dependencies: dict[str, DependencyHealth]
    connected_users: int = Field(..., description="Users with a live channel")
