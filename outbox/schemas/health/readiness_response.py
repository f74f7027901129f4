"""Readiness response schema."""

from pydantic import BaseModel, Field

from outbox.schemas.health.dependency_health import DependencyHealth


class ReadinessResponse(BaseModel):
    """Response model for readiness checks.

    The service stays ready while the channel is disconnected; messages
    simply accumulate until it reconnects, so that case is reported as
    degraded rather than not ready.
    """

    ready: bool = Field(..., description="Service can accept new messages")
    status: str = Field(..., description="'ready', 'degraded', or 'not ready'")
    degraded: bool = Field(..., description="Whether any dependency is unhealthy")
    dependencies: dict[str, DependencyHealth] = Field(
        ..., description="Status of each dependency"
    )
