"""
Device Use Cases - Application Layer

This module defines use cases for device operations. Each one is a
sequential load, decide, persist pipeline around the device repository:
the decisions themselves live in the domain policy.

No lock spans the load and the save of an update, so two concurrent
updates of the same device resolve as last-writer-wins.

Errors are propagated to the caller untouched; only successful outcomes
are logged here.
"""

from typing import List, Optional

from dependency_injector.wiring import Provide, inject

from devices_api.domain.entities.device import Device
from devices_api.domain.entities.errors import DeviceNotFoundError
from devices_api.domain.repositories.device_repository import IDeviceRepository
from devices_api.domain.services.device_policy import (
    ensure_device_deletable,
    plan_device_update,
)
from devices_api.shared import get_logger

from ..dtos.device_dto import (
    CreateDeviceResponseDTO,
    DeviceRequestDTO,
    DeviceResponseDTO,
    UpdateDeviceResponseDTO,
)

logger = get_logger(__name__)


async def _load_device(repository: IDeviceRepository, device_id: str) -> Device:
    device = await repository.get_by_id(device_id)
    if device is None:
        raise DeviceNotFoundError(device_id)
    return device


class CreateDeviceUseCase:
    """Use case for registering a new device."""

    @inject
    def __init__(
        self,
        device_repository: IDeviceRepository = Provide["device_repository"],
    ):
        self.device_repository = device_repository

    async def execute(self, device_dto: DeviceRequestDTO) -> CreateDeviceResponseDTO:
        """
        Create a device with a generated identifier and creation time.

        Args:
            device_dto: Requested name, brand and state

        Returns:
            The identifier of the new device

        Raises:
            DeviceValidationError: If the payload violates a device
                invariant; nothing is stored
            RepositoryError: If the store rejects the write
        """
        device = Device(
            name=device_dto.name,
            brand=device_dto.brand,
            state=device_dto.state,
        )

        await self.device_repository.create(device)

        logger.info(
            "devices.created",
            device_id=device.id,
            brand=device.brand,
            state=device.state.value,
        )
        return CreateDeviceResponseDTO(id=device.id)


class UpdateDeviceUseCase:
    """Use case for updating name, brand and state of a device."""

    @inject
    def __init__(
        self,
        device_repository: IDeviceRepository = Provide["device_repository"],
    ):
        self.device_repository = device_repository

    async def execute(
        self, device_id: str, device_dto: DeviceRequestDTO
    ) -> UpdateDeviceResponseDTO:
        """
        Apply the allowed part of an update and store the result.

        The creation time is not part of the request and cannot change.
        Nothing is written when no field was applied.

        Args:
            device_id: The unique identifier of the device to update
            device_dto: Requested name, brand and state

        Returns:
            Updated and ignored field names plus the stored device

        Raises:
            DeviceNotFoundError: If the device does not exist
            InvalidStateError: If a different, unknown state is requested;
                nothing is stored
            DeviceValidationError: If an applied value is empty
            RepositoryError: If the store fails
        """
        device = await _load_device(self.device_repository, device_id)

        plan = plan_device_update(
            device,
            name=device_dto.name,
            brand=device_dto.brand,
            state=device_dto.state,
        )

        if plan.has_changes:
            await self.device_repository.update(plan.device)

        logger.info(
            "devices.updated",
            device_id=device_id,
            updated_fields=plan.updated_fields,
            ignored_fields=plan.ignored_fields,
        )
        return UpdateDeviceResponseDTO(
            updated_fields=plan.updated_fields,
            ignored_fields=plan.ignored_fields,
            device=DeviceResponseDTO.from_domain(plan.device),
        )


class DeleteDeviceUseCase:
    """Use case for deleting a device that is not in use."""

    @inject
    def __init__(
        self,
        device_repository: IDeviceRepository = Provide["device_repository"],
    ):
        self.device_repository = device_repository

    async def execute(self, device_id: str) -> None:
        """
        Delete a device by its ID.

        Args:
            device_id: The unique identifier of the device to delete

        Raises:
            DeviceNotFoundError: If the device does not exist
            DeleteDeviceInUseError: If the device is in use; nothing is
                deleted
            RepositoryError: If the store fails
        """
        device = await _load_device(self.device_repository, device_id)

        ensure_device_deletable(device)

        await self.device_repository.delete(device_id)
        logger.info("devices.deleted", device_id=device_id)


class GetDeviceByIdUseCase:
    """Use case for retrieving a device by ID."""

    @inject
    def __init__(
        self,
        device_repository: IDeviceRepository = Provide["device_repository"],
    ):
        self.device_repository = device_repository

    async def execute(self, device_id: str) -> DeviceResponseDTO:
        """
        Raises:
            DeviceNotFoundError: If the device does not exist
        """
        device = await _load_device(self.device_repository, device_id)
        return DeviceResponseDTO.from_domain(device)


class GetDevicesUseCase:
    """Use case for listing devices, optionally filtered by brand or state."""

    @inject
    def __init__(
        self,
        device_repository: IDeviceRepository = Provide["device_repository"],
    ):
        self.device_repository = device_repository

    async def execute(
        self,
        brand: Optional[str] = None,
        state: Optional[str] = None,
    ) -> List[DeviceResponseDTO]:
        """
        List devices with an optional exact-match filter.

        The brand filter wins when both are given. An unknown state simply
        matches nothing.

        Args:
            brand: Only return devices of this brand
            state: Only return devices in this state

        Returns:
            Matching devices, possibly an empty list
        """
        if brand:
            devices = await self.device_repository.list_by_brand(brand)
        elif state:
            devices = await self.device_repository.list_by_state(state)
        else:
            devices = await self.device_repository.list()

        logger.debug(
            "devices.listed",
            brand=brand,
            state=state,
            count=len(devices),
        )
        return [DeviceResponseDTO.from_domain(device) for device in devices]
