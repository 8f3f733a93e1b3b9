"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from dependency_injector import containers, providers

from devices_api.application.use_cases.device_use_cases import (
    CreateDeviceUseCase,
    DeleteDeviceUseCase,
    GetDeviceByIdUseCase,
    GetDevicesUseCase,
    UpdateDeviceUseCase,
)
from devices_api.application.use_cases.health_use_cases import GetHealthStatusUseCase
from devices_api.infrastructure.database import MongoDatabase
from devices_api.infrastructure.repositories.device_repository import (
    DeviceRepository,
)
from devices_api.infrastructure.services.health_check_service import (
    HealthCheckService,
)
from devices_api.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(
        packages=["..presentation", "..application"]
    )

    # Settings
    config = providers.Configuration()

    # Infrastructure
    mongo_database = providers.Singleton(
        MongoDatabase,
        mongo_uri=config.database.mongo_uri,
        db_name=config.database.database_name,
        timeout_ms=config.database.timeout_ms,
    )

    device_repository = providers.Singleton(
        DeviceRepository,
        mongo_database=mongo_database,
    )

    health_check_service = providers.Singleton(
        HealthCheckService,
        mongo_database=mongo_database,
    )

    # Application (use cases)
    create_device_use_case = providers.Factory(
        CreateDeviceUseCase,
        device_repository=device_repository,
    )

    update_device_use_case = providers.Factory(
        UpdateDeviceUseCase,
        device_repository=device_repository,
    )

    delete_device_use_case = providers.Factory(
        DeleteDeviceUseCase,
        device_repository=device_repository,
    )

    get_device_by_id_use_case = providers.Factory(
        GetDeviceByIdUseCase,
        device_repository=device_repository,
    )

    get_devices_use_case = providers.Factory(
        GetDevicesUseCase,
        device_repository=device_repository,
    )

    get_health_status_use_case = providers.Factory(
        GetHealthStatusUseCase,
        health_check_service=health_check_service,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan() -> AsyncIterator[AppContainer]:
    """
    Lifecycle of the external resources held by the container.

    Ensures the device indexes exist on startup and closes the MongoDB
    client on shutdown.
    """
    container = get_container()
    mongo_database = container.mongo_database()

    try:
        logger.info("container.mongo.ensure_indexes")
        await mongo_database.create_indexes()
        logger.info("container.resources.initialized")
        yield container
    finally:
        logger.info("container.mongo.close")
        await mongo_database.close()
        logger.info("container.resources.shutdown")
