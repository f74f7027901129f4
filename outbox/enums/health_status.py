"""Health status enumeration for the database and messaging channel."""

from enum import Enum


class HealthStatus(str, Enum):
    """Health of a single dependency reported by the readiness probe."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DISCONNECTED = "disconnected"
    ERROR = "error"
