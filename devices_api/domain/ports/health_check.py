"""Domain service abstraction for health checks."""

from __future__ import annotations

from typing import Protocol

from devices_api.domain.entities.health import SystemHealth


class IHealthCheckService(Protocol):
    """Interface for retrieving system health information."""

    async def evaluate(self) -> SystemHealth:
        """Probe every dependency and aggregate the result."""
        ...
