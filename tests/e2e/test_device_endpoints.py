from __future__ import annotations

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from devices_api.domain.entities.health import DependencyStatus, ServiceStatus, SystemHealth
from devices_api.main.app import create_app
from devices_api.main.container import get_container
from devices_api.shared import REQUEST_ID_HEADER
from tests.conftest import FakeMongoDatabase

MISSING_ID = "00000000-0000-4000-8000-000000000000"


class _HealthCheckService:
    def __init__(self, status: ServiceStatus):
        self._health = SystemHealth.from_dependencies(
            [DependencyStatus(name="mongo", status=status)]
        )

    async def evaluate(self) -> SystemHealth:
        return self._health


@pytest.fixture()
def fake_db() -> FakeMongoDatabase:
    return FakeMongoDatabase()


@pytest.fixture()
def client(fake_db: FakeMongoDatabase):
    app = create_app()
    container = get_container()
    container.mongo_database.override(providers.Object(fake_db))

    with TestClient(app) as test_client:
        yield test_client


def _create(client: TestClient, **overrides: str) -> str:
    payload = {"name": "Galaxy S21", "brand": "Samsung", "state": "available"}
    payload.update(overrides)
    response = client.post("/devices", json=payload)
    assert response.status_code == 201
    return response.json()["id"]


def test_create_and_fetch_device(client: TestClient) -> None:
    device_id = _create(client)

    response = client.get(f"/devices/{device_id}")

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == device_id
    assert body["state"] == "available"
    assert body["created_at"]
    assert response.headers[REQUEST_ID_HEADER]


def test_create_with_invalid_state_is_400(client: TestClient) -> None:
    response = client.post(
        "/devices", json={"name": "Pixel", "brand": "Google", "state": "broken"}
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "state broken is invalid"


def test_create_with_malformed_body_is_422(client: TestClient) -> None:
    response = client.post("/devices", json={"name": "Pixel"})

    assert response.status_code == 422


def test_update_in_use_device_reports_ignored_fields(client: TestClient) -> None:
    device_id = _create(client, state="in-use")

    response = client.put(
        f"/devices/{device_id}",
        json={"name": "Galaxy S22", "brand": "Apple", "state": "available"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["updated_fields"] == ["name"]
    assert body["ignored_fields"] == ["brand", "state"]
    assert body["device"]["brand"] == "Samsung"
    assert body["device"]["state"] == "in-use"


def test_update_missing_device_is_404(client: TestClient) -> None:
    response = client.put(
        f"/devices/{MISSING_ID}",
        json={"name": "x", "brand": "y", "state": "available"},
    )

    assert response.status_code == 404


def test_delete_rules(client: TestClient) -> None:
    idle_id = _create(client)
    busy_id = _create(client, state="in-use")

    assert client.delete(f"/devices/{busy_id}").status_code == 409

    response = client.delete(f"/devices/{idle_id}")
    assert response.status_code == 204
    assert response.content == b""

    assert client.delete(f"/devices/{idle_id}").status_code == 404
    assert client.get(f"/devices/{busy_id}").status_code == 200


def test_list_devices_with_filters(client: TestClient) -> None:
    samsung_id = _create(client)
    apple_id = _create(client, name="iPhone 13", brand="Apple", state="in-use")

    everything = client.get("/devices").json()
    by_brand = client.get("/devices", params={"brand": "Apple"}).json()
    by_state = client.get("/devices", params={"state": "available"}).json()
    both = client.get("/devices", params={"brand": "Samsung", "state": "in-use"}).json()

    assert [device["id"] for device in everything] == [samsung_id, apple_id]
    assert [device["id"] for device in by_brand] == [apple_id]
    assert [device["id"] for device in by_state] == [samsung_id]
    assert [device["id"] for device in both] == [samsung_id]
    assert client.get("/devices", params={"brand": "Nokia"}).json() == []


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "up"


def test_health_endpoint_down_is_503(client: TestClient) -> None:
    get_container().health_check_service.override(
        providers.Object(_HealthCheckService(ServiceStatus.DOWN))
    )

    response = client.get("/health")

    assert response.status_code == 503
    assert response.json()["status"] == "down"
