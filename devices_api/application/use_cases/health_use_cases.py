"""Use case for the health endpoint."""

from dependency_injector.wiring import Provide, inject

from devices_api.application.dtos.health_dto import SystemHealthDTO
from devices_api.domain.ports.health_check import IHealthCheckService


class GetHealthStatusUseCase:
    """Use case responsible for returning health status."""

    @inject
    def __init__(
        self,
        health_check_service: IHealthCheckService = Provide["health_check_service"],
    ) -> None:
        self._health_check_service = health_check_service

    async def execute(self) -> SystemHealthDTO:
        system_health = await self._health_check_service.evaluate()
        return SystemHealthDTO.from_domain(system_health)
