"""
Device Repository Interface

This module defines the persistence port for devices. Use cases depend on
this contract only; the store behind it is an infrastructure detail.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from devices_api.domain.entities.device import Device


class IDeviceRepository(ABC):
    """
    Interface for Device repository implementations.

    Implementations own connection pooling and must be safe to share
    between concurrent requests. Every method may raise RepositoryError.
    """

    @abstractmethod
    async def create(self, device: Device) -> None:
        """
        Store a new device.

        Args:
            device: A validated device with a fresh identifier
        """
        pass

    @abstractmethod
    async def update(self, device: Device) -> None:
        """
        Overwrite the stored name, brand and state of a device.

        The stored creation time is never modified.

        Args:
            device: The device with updated fields
        """
        pass

    @abstractmethod
    async def delete(self, device_id: str) -> None:
        """
        Delete a device by its ID.

        Args:
            device_id: The unique identifier of the device to delete
        """
        pass

    @abstractmethod
    async def get_by_id(self, device_id: str) -> Optional[Device]:
        """
        Find a device by its ID.

        Args:
            device_id: The unique identifier of the device to find

        Returns:
            The device if found, None otherwise
        """
        pass

    @abstractmethod
    async def list(self) -> List[Device]:
        """Return every stored device."""
        pass

    @abstractmethod
    async def list_by_brand(self, brand: str) -> List[Device]:
        """Return the devices whose brand matches ``brand`` exactly."""
        pass

    @abstractmethod
    async def list_by_state(self, state: str) -> List[Device]:
        """Return the devices whose state matches ``state`` exactly."""
        pass
