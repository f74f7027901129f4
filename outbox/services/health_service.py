"""Health check service for the database and messaging channel."""

import logging
import time

from django.db import connection
from django.db.utils import OperationalError

from outbox.enums import HealthStatus
from outbox.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)
from outbox.services.status_tracker import StatusTracker

logger = logging.getLogger(__name__)


class HealthService:
    """Service for performing health checks with caching."""

    def __init__(
        self,
        status_tracker: StatusTracker,
        cache_ttl_seconds: float = 5.0,
    ) -> None:
        """Initialize the health service.

        Args:
            status_tracker: Source of the persisted channel readiness
            cache_ttl_seconds: Time to live for cached database check results
        """
        self.status_tracker = status_tracker
        self.cache_ttl_seconds = cache_ttl_seconds
        self._db_health_cache: DependencyHealth | None = None
        self._db_health_cache_time: float = 0.0

    def get_liveness_status(self, worker_running: bool) -> LivenessResponse:
        """Get liveness status (always alive while the process answers).

        Args:
            worker_running: Whether this process runs the delivery worker

        Returns:
            LivenessResponse with status "alive"
        """
        return LivenessResponse(status="alive", worker_running=worker_running)

    def get_readiness_status(self) -> ReadinessResponse:
        """Get readiness status with database and channel health checks.

        The service is not ready without its database. A disconnected
        channel only degrades it: enqueued messages wait for reconnection.

        Returns:
            ReadinessResponse with overall status and dependency health
        """
        db_health = self.check_database_health()
        channel_health = (
            self.check_channel_health()
            if db_health.healthy
            else DependencyHealth(
                healthy=False,
                status=HealthStatus.UNHEALTHY,
                message="Channel status unavailable without database",
            )
        )

        dependencies = {"database": db_health, "channel": channel_health}

        if not db_health.healthy:
            service_ready = False
            service_status = "not ready"
        elif not channel_health.healthy:
            service_ready = True
            service_status = "degraded"
        else:
            service_ready = True
            service_status = "ready"

        return ReadinessResponse(
            ready=service_ready,
            status=service_status,
            degraded=not (db_health.healthy and channel_health.healthy),
            dependencies=dependencies,
        )

    def check_database_health(self) -> DependencyHealth:
        """Check database connectivity with caching.

        Uses Django's ensure_connection() for efficient socket validation
        without executing queries. Results are cached for cache_ttl_seconds.

        Returns:
            DependencyHealth with database status
        """
        current_time = time.time()
        if (
            self._db_health_cache is not None
            and (current_time - self._db_health_cache_time) < self.cache_ttl_seconds
        ):
            return self._db_health_cache

        start_time = time.perf_counter()
        try:
            connection.ensure_connection()
            new_health = DependencyHealth(
                healthy=True,
                status=HealthStatus.HEALTHY,
                message="Database connection successful",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )
        except OperationalError as e:
            new_health = DependencyHealth(
                healthy=False,
                status=HealthStatus.UNHEALTHY,
                message=f"Database connection failed: {e!s}",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )
            logger.warning("Database health check failed: %s", e)
        except Exception as e:
            new_health = DependencyHealth(
                healthy=False,
                status=HealthStatus.ERROR,
                message=f"Unexpected error checking database: {e!s}",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )
            logger.error("Unexpected error checking database: %s", e)

        self._db_health_cache = new_health
        self._db_health_cache_time = current_time

        return new_health

    def check_channel_health(self) -> DependencyHealth:
        """Report the channel readiness last recorded by the status tracker.

        Returns:
            DependencyHealth with channel status
        """
        start_time = time.perf_counter()
        try:
            status = self.status_tracker.get_status()
        except Exception as e:
            logger.error("Unexpected error reading channel status: %s", e)
            return DependencyHealth(
                healthy=False,
                status=HealthStatus.ERROR,
                message=f"Unexpected error reading channel status: {e!s}",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )

        response_time_ms = (time.perf_counter() - start_time) * 1000
        if status.is_ready:
            return DependencyHealth(
                healthy=True,
                status=HealthStatus.HEALTHY,
                message="Channel ready",
                response_time_ms=response_time_ms,
            )
        return DependencyHealth(
            healthy=False,
            status=HealthStatus.DISCONNECTED,
            message=(
                f"Channel not ready since {status.last_heartbeat.isoformat()}, "
                f"{status.pending_count} messages pending"
            ),
            response_time_ms=response_time_ms,
        )
