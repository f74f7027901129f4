"""Dependency health schema."""

from pydantic import Field

from outbox.enums.health_status import HealthStatus
from outbox.schemas.base_schema_model import BaseSchemaModel


class DependencyHealth(BaseSchemaModel):
    """Health of the database or the messaging channel."""

    healthy: bool = Field(..., description="Whether the dependency is healthy")
    status: HealthStatus = Field(..., description="Health status of the dependency")
    message: str = Field(..., description="Human-readable health message")
    response_time_ms: float | None = Field(
        None, description="Check duration in milliseconds"
    )
