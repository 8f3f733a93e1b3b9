"""Infrastructure implementation for system health checks."""

from __future__ import annotations

from time import perf_counter
from typing import Optional

from devices_api.domain.entities.health import (
    DependencyStatus,
    ServiceStatus,
    SystemHealth,
)
from devices_api.domain.ports.health_check import IHealthCheckService
from devices_api.infrastructure.database.mongo_database import MongoDatabase


class HealthCheckService(IHealthCheckService):
    """Probe the device store and report its availability."""

    def __init__(self, mongo_database: Optional[MongoDatabase]) -> None:
        self._mongo_database = mongo_database

    async def evaluate(self) -> SystemHealth:
        return SystemHealth.from_dependencies([await self._check_mongo()])

    async def _check_mongo(self) -> DependencyStatus:
        if not self._mongo_database:
            return DependencyStatus(
                name="mongo",
                status=ServiceStatus.UNKNOWN,
                message="Mongo database client not configured.",
            )

        start = perf_counter()
        try:
            await self._mongo_database.ping()
        except Exception as exc:
            return DependencyStatus(
                name="mongo",
                status=ServiceStatus.DOWN,
                message=f"MongoDB ping failed: {exc}",
                latency_ms=(perf_counter() - start) * 1000,
            )
        return DependencyStatus(
            name="mongo",
            status=ServiceStatus.UP,
            message="MongoDB ping successful",
            latency_ms=(perf_counter() - start) * 1000,
            details={"database": self._mongo_database.name},
        )
