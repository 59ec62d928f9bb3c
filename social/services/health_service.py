"""Health check service with cached dependency checks."""

import logging
import time
from typing import TYPE_CHECKING

from django.core.cache import cache
from django.db import connection
from django.db.utils import OperationalError

from social.enums import HealthStatus
from social.schemas import DependencyHealth, LivenessResponse, ReadinessResponse

if TYPE_CHECKING:
    from social.realtime.presence import PresenceRegistry

logger = logging.getLogger(__name__)


class HealthService:
    """Service for performing health checks with caching."""

    def __init__(self, cache_ttl_seconds: float = 5.0) -> None:
        """Initialize the health service.

        Args:
            cache_ttl_seconds: Time to live for cached health check results
        """
        self.cache_ttl_seconds = cache_ttl_seconds
        self._db_health_cache: DependencyHealth | None = None
        self._db_health_cache_time: float = 0.0
        self._redis_health_cache: DependencyHealth | None = None
        self._redis_health_cache_time: float = 0.0
        self._presence_registry: PresenceRegistry | None = None

    def set_presence_registry(self, registry: "PresenceRegistry") -> None:
        """Set the registry whose size is reported as connected users."""
        self._presence_registry = registry

    def get_liveness_status(self) -> LivenessResponse:
        return LivenessResponse(status="alive")

    def get_readiness_status(self) -> ReadinessResponse:
        """Get readiness status with database and Redis health checks.

        Returns degraded (ready=True, degraded=True) when a dependency is
        down so the process keeps serving live connections meanwhile.
        """
        db_health = self.check_database_health()
        redis_health = self.check_redis_health()
        degraded = not (db_health.healthy and redis_health.healthy)

        return ReadinessResponse(
            ready=True,
            status="degraded" if degraded else "ready",
            degraded=degraded,
            dependencies={"database": db_health, "redis": redis_health},
            connected_users=(
                self._presence_registry.count() if self._presence_registry else 0
            ),
        )

    def check_database_health(self) -> DependencyHealth:
        """Check database connectivity, cached for ``cache_ttl_seconds``."""
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
            logger.warning("Database health check failed: %s", e)
            new_health = DependencyHealth(
                healthy=False,
                status=HealthStatus.DISCONNECTED,
                message=f"Database connection failed: {e!s}",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )

        self._db_health_cache = new_health
        self._db_health_cache_time = current_time
        return new_health

    def check_redis_health(self) -> DependencyHealth:
        """Check the Redis-backed cache, cached for ``cache_ttl_seconds``."""
        current_time = time.time()
        if (
            self._redis_health_cache is not None
            and (current_time - self._redis_health_cache_time) < self.cache_ttl_seconds
        ):
            return self._redis_health_cache

        start_time = time.perf_counter()
        try:
            cache.set("__health_check__", "ok", timeout=1)
            healthy = cache.get("__health_check__") == "ok"
            message = (
                "Redis connection successful"
                if healthy
                else "Redis health check failed: unexpected result"
            )
        except Exception as e:
            logger.warning("Redis health check failed: %s", e)
            healthy = False
            message = f"Redis connection failed: {e!s}"

        new_health = DependencyHealth(
            healthy=healthy,
            status=HealthStatus.HEALTHY if healthy else HealthStatus.UNHEALTHY,
            message=message,
            response_time_ms=(time.perf_counter() - start_time) * 1000,
        )
        self._redis_health_cache = new_health
        self._redis_health_cache_time = current_time
        return new_health


# Global health service instance
health_service = HealthService()
