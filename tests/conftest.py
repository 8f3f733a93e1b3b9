from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Sequence

import pytest

from devices_api.domain.entities.device import Device, DeviceState
from devices_api.domain.repositories.device_repository import IDeviceRepository
from devices_api.infrastructure.database.mongo_database import DocumentNotFoundError

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

DEVICE_ID = "49e6d977-58a6-4424-a058-8d025991b325"
OTHER_DEVICE_ID = "7c9e6679-7425-40de-944b-e07fc1f90ae7"


@pytest.fixture()
def dummy_now() -> datetime:
    return datetime(2025, 1, 10, 15, 4, 5, tzinfo=timezone.utc)


@pytest.fixture()
def available_device(dummy_now: datetime) -> Device:
    return Device(
        id=DEVICE_ID,
        name="Galaxy S21",
        brand="Samsung",
        state=DeviceState.AVAILABLE,
        created_at=dummy_now,
    )


@pytest.fixture()
def in_use_device(dummy_now: datetime) -> Device:
    return Device(
        id=OTHER_DEVICE_ID,
        name="iPhone 13",
        brand="Apple",
        state=DeviceState.IN_USE,
        created_at=dummy_now + timedelta(minutes=1),
    )


class InMemoryDeviceRepository(IDeviceRepository):
    """Dict-backed repository that records every write."""

    def __init__(self, devices: Sequence[Device] = ()) -> None:
        self.devices: Dict[str, Device] = {device.id: device for device in devices}
        self.created: List[str] = []
        self.updated: List[str] = []
        self.deleted: List[str] = []

    async def create(self, device: Device) -> None:
        self.devices[device.id] = device
        self.created.append(device.id)

    async def update(self, device: Device) -> None:
        self.devices[device.id] = device
        self.updated.append(device.id)

    async def delete(self, device_id: str) -> None:
        self.devices.pop(device_id)
        self.deleted.append(device_id)

    async def get_by_id(self, device_id: str) -> Optional[Device]:
        return self.devices.get(device_id)

    async def list(self) -> List[Device]:
        return self._sorted(self.devices.values())

    async def list_by_brand(self, brand: str) -> List[Device]:
        return self._sorted(d for d in self.devices.values() if d.brand == brand)

    async def list_by_state(self, state: str) -> List[Device]:
        return self._sorted(d for d in self.devices.values() if d.state == state)

    @staticmethod
    def _sorted(devices: Any) -> List[Device]:
        return sorted(devices, key=lambda device: device.created_at)


class FakeCursor:
    def __init__(self, documents: Sequence[Dict[str, Any]]):
        self._documents = list(documents)
        self.sorted_by: Optional[tuple[str, int]] = None

    def sort(self, key: str, direction: int = 1) -> "FakeCursor":
        self.sorted_by = (key, direction)
        self._documents.sort(key=lambda doc: doc.get(key), reverse=direction < 0)
        return self

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        return list(self._documents)


class FakeCollection:
    """Async stand-in for pymongo's AsyncCollection, keyed by ``id``."""

    def __init__(self) -> None:
        self.documents: Dict[str, Dict[str, Any]] = {}
        self.inserts: List[Dict[str, Any]] = []
        self.created_indexes: List[tuple[Any, ...]] = []
        self.last_query: Dict[str, Any] | None = None

    async def find_one(
        self, query: Dict[str, Any], projection: Any = None
    ) -> Dict[str, Any] | None:
        self.last_query = query
        for document in self.documents.values():
            if self._matches(document, query):
                return self._project(document)
        return None

    def find(self, query: Dict[str, Any], projection: Any = None) -> FakeCursor:
        self.last_query = query
        return FakeCursor(
            [
                self._project(doc)
                for doc in self.documents.values()
                if self._matches(doc, query)
            ]
        )

    async def insert_one(self, document: Dict[str, Any]) -> Any:
        document["_id"] = document["id"]
        self.inserts.append(document)
        self.documents[document["id"]] = document
        return SimpleNamespace(acknowledged=True, inserted_id=document["id"])

    async def update_one(self, query: Dict[str, Any], update: Dict[str, Any]) -> Any:
        for document in self.documents.values():
            if self._matches(document, query):
                document.update(update["$set"])
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def delete_one(self, query: Dict[str, Any]) -> Any:
        for key, document in list(self.documents.items()):
            if self._matches(document, query):
                del self.documents[key]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    async def create_index(self, keys: Any, name: str | None = None, **kwargs: Any) -> Any:
        self.created_indexes.append((keys, name, kwargs))
        return name or keys

    @staticmethod
    def _project(document: Dict[str, Any]) -> Dict[str, Any]:
        return {key: value for key, value in document.items() if key != "_id"}

    @staticmethod
    def _matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
        for key, value in query.items():
            if document.get(key) != value:
                return False
        return True


class FakeMongoDatabase:
    """Mirror of MongoDatabase's public surface, backed by FakeCollection."""

    def __init__(self) -> None:
        self.collections: Dict[str, FakeCollection] = {}
        self.name = "devices_test"
        self.ping_error: Exception | None = None
        self.closed = False
        self.ensured_indexes = False

    def get_collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())

    async def find_one(self, collection_name: str, query: Dict[str, Any]) -> Any:
        return await self.get_collection(collection_name).find_one(query)

    async def find_many(
        self,
        collection_name: str,
        query: Dict[str, Any],
        sort_by: str | None = None,
        sort_direction: int = 1,
    ) -> List[Dict[str, Any]]:
        cursor = self.get_collection(collection_name).find(query)
        if sort_by:
            cursor.sort(sort_by, sort_direction)
        return await cursor.to_list()

    async def insert_one(self, collection_name: str, document: Dict[str, Any]) -> Any:
        await self.get_collection(collection_name).insert_one(dict(document))
        return document

    async def update_one(
        self, collection_name: str, query: Dict[str, Any], values: Dict[str, Any]
    ) -> None:
        result = await self.get_collection(collection_name).update_one(
            query, {"$set": values}
        )
        if result.matched_count == 0:
            raise DocumentNotFoundError(collection_name, query)

    async def delete_one(self, collection_name: str, query: Dict[str, Any]) -> None:
        result = await self.get_collection(collection_name).delete_one(query)
        if result.deleted_count == 0:
            raise DocumentNotFoundError(collection_name, query)

    async def ping(self) -> None:
        if self.ping_error is not None:
            raise self.ping_error

    async def create_indexes(self) -> None:
        self.ensured_indexes = True

    async def close(self) -> None:
        self.closed = True


@pytest.fixture()
def fake_mongo_database() -> FakeMongoDatabase:
    return FakeMongoDatabase()


@pytest.fixture()
def device_repository(
    available_device: Device, in_use_device: Device
) -> InMemoryDeviceRepository:
    return InMemoryDeviceRepository([available_device, in_use_device])
