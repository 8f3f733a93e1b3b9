"""
MongoDB Device Repository - Infrastructure Layer

This module implements the IDeviceRepository interface using MongoDB
as the underlying data store.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

import pymongo
from pymongo.errors import PyMongoError

from devices_api.domain.entities.device import Device
from devices_api.domain.entities.errors import (
    DeviceNotFoundError,
    DeviceValidationError,
    RepositoryError,
    RepositoryTimeoutError,
)
from devices_api.domain.repositories.device_repository import IDeviceRepository
from devices_api.infrastructure.database import MongoDatabase
from devices_api.infrastructure.database.mongo_database import (
    DEVICES_COLLECTION,
    DocumentNotFoundError,
)


class DeviceRepository(IDeviceRepository):
    """MongoDB implementation of the DeviceRepository."""

    COLLECTION_NAME = DEVICES_COLLECTION

    def __init__(self, mongo_database: MongoDatabase):
        """
        Initialize the MongoDB device repository.

        Args:
            mongo_database: MongoDB database client
        """
        self.db = mongo_database

    @asynccontextmanager
    async def _storage_call(self, operation: str) -> AsyncIterator[None]:
        """Translate driver failures into RepositoryError."""
        try:
            yield
        except PyMongoError as exc:
            details = {"operation": operation}
            if exc.timeout:
                raise RepositoryTimeoutError(
                    f"Device {operation} timed out: {exc}", details
                ) from exc
            raise RepositoryError(f"Failed to {operation} device: {exc}", details) from exc

    def _to_document(self, device: Device) -> Dict[str, Any]:
        """Convert a Device entity to a MongoDB document."""
        return {
            "id": device.id,
            "name": device.name,
            "brand": device.brand,
            "state": device.state.value,
            "created_at": device.created_at,
        }

    def _to_entity(self, document: Dict[str, Any]) -> Device:
        """Convert a MongoDB document to a Device entity."""
        try:
            return Device(
                id=document.get("id", ""),
                name=document.get("name", ""),
                brand=document.get("brand", ""),
                state=document.get("state", ""),
                created_at=document.get("created_at"),
            )
        except DeviceValidationError as exc:
            raise RepositoryError(
                f"Stored device is invalid: {exc.message}",
                {"id": document.get("id"), **exc.details},
            ) from exc

    def _to_entities(self, documents: List[Dict[str, Any]]) -> List[Device]:
        return [self._to_entity(document) for document in documents]

    async def create(self, device: Device) -> None:
        """
        Insert a new device document.

        Raises:
            RepositoryError: If the insert fails, including duplicate ids
        """
        async with self._storage_call("create"):
            await self.db.insert_one(self.COLLECTION_NAME, self._to_document(device))

    async def update(self, device: Device) -> None:
        """
        Set name, brand and state of a stored device. ``created_at`` is
        not part of the update.

        Raises:
            DeviceNotFoundError: If the device vanished since it was loaded
            RepositoryError: If the update fails
        """
        values = {
            "name": device.name,
            "brand": device.brand,
            "state": device.state.value,
        }
        try:
            async with self._storage_call("update"):
                await self.db.update_one(
                    self.COLLECTION_NAME, {"id": device.id}, values
                )
        except DocumentNotFoundError:
            raise DeviceNotFoundError(device.id) from None

    async def delete(self, device_id: str) -> None:
        """
        Raises:
            DeviceNotFoundError: If the device does not exist
            RepositoryError: If the deletion fails
        """
        try:
            async with self._storage_call("delete"):
                await self.db.delete_one(self.COLLECTION_NAME, {"id": device_id})
        except DocumentNotFoundError:
            raise DeviceNotFoundError(device_id) from None

    async def get_by_id(self, device_id: str) -> Optional[Device]:
        """
        Find a device by its ID.

        Returns:
            The device if found, None otherwise
        """
        async with self._storage_call("load"):
            document = await self.db.find_one(self.COLLECTION_NAME, {"id": device_id})
        if document is None:
            return None
        return self._to_entity(document)

    async def list(self) -> List[Device]:
        return await self._find({})

    async def list_by_brand(self, brand: str) -> List[Device]:
        return await self._find({"brand": brand})

    async def list_by_state(self, state: str) -> List[Device]:
        return await self._find({"state": state})

    async def _find(self, query: Dict[str, Any]) -> List[Device]:
        async with self._storage_call("list"):
            documents = await self.db.find_many(
                self.COLLECTION_NAME,
                query,
                sort_by="created_at",
                sort_direction=pymongo.ASCENDING,
            )
        return self._to_entities(documents)
