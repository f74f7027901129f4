"""Health check schemas."""

from outbox.schemas.health.dependency_health import DependencyHealth
from outbox.schemas.health.liveness_response import LivenessResponse
from outbox.schemas.health.readiness_response import ReadinessResponse

__all__ = ["DependencyHealth", "LivenessResponse", "ReadinessResponse"]
