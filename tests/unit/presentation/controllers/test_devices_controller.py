from __future__ import annotations

from typing import Any, List, cast

import pytest
from fastapi import HTTPException

from devices_api.application.dtos.device_dto import (
    CreateDeviceResponseDTO,
    DeviceRequestDTO,
    DeviceResponseDTO,
    UpdateDeviceResponseDTO,
)
from devices_api.application.use_cases.device_use_cases import (
    CreateDeviceUseCase,
    DeleteDeviceUseCase,
    GetDeviceByIdUseCase,
    GetDevicesUseCase,
    UpdateDeviceUseCase,
)
from devices_api.domain.entities.device import Device
from devices_api.domain.entities.errors import (
    DeleteDeviceInUseError,
    DeviceNotFoundError,
    InvalidStateError,
    NameRequiredError,
    RepositoryError,
    RepositoryTimeoutError,
)
from devices_api.presentation.controllers import devices_controller as controller
from tests.conftest import DEVICE_ID

REQUEST = DeviceRequestDTO(name="Pixel 8", brand="Google", state="available")


class _StubUseCase:
    """Returns ``result`` or raises ``error`` from execute."""

    def __init__(self, result: Any = None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: List[dict] = []

    async def execute(self, *args: Any, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.mark.asyncio
async def test_create_device_returns_id() -> None:
    use_case = _StubUseCase(result=CreateDeviceResponseDTO(id=DEVICE_ID))

    result = await controller.create_device(
        REQUEST, create_device_use_case=cast(CreateDeviceUseCase, use_case)
    )

    assert result.id == DEVICE_ID


@pytest.mark.asyncio
async def test_create_device_validation_error_is_400() -> None:
    use_case = _StubUseCase(error=NameRequiredError())

    with pytest.raises(HTTPException) as exc_info:
        await controller.create_device(
            REQUEST, create_device_use_case=cast(CreateDeviceUseCase, use_case)
        )

    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "name is required"


@pytest.mark.asyncio
async def test_create_device_storage_failure_is_500() -> None:
    use_case = _StubUseCase(error=RepositoryError("insert failed"))

    with pytest.raises(HTTPException) as exc_info:
        await controller.create_device(
            REQUEST, create_device_use_case=cast(CreateDeviceUseCase, use_case)
        )

    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_update_device_returns_summary(in_use_device: Device) -> None:
    summary = UpdateDeviceResponseDTO(
        updated_fields=["name"],
        ignored_fields=["brand", "state"],
        device=DeviceResponseDTO.from_domain(in_use_device),
    )
    use_case = _StubUseCase(result=summary)

    result = await controller.update_device(
        in_use_device.id,
        REQUEST,
        update_device_use_case=cast(UpdateDeviceUseCase, use_case),
    )

    assert result.ignored_fields == ["brand", "state"]
    assert use_case.calls == [{"device_id": in_use_device.id, "device_dto": REQUEST}]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error, status_code",
    [
        (DeviceNotFoundError(DEVICE_ID), 404),
        (InvalidStateError("broken"), 400),
        (RepositoryTimeoutError("slow"), 504),
        (RuntimeError("boom"), 500),
    ],
)
async def test_update_device_error_mapping(error, status_code) -> None:
    use_case = _StubUseCase(error=error)

    with pytest.raises(HTTPException) as exc_info:
        await controller.update_device(
            DEVICE_ID, REQUEST, update_device_use_case=cast(UpdateDeviceUseCase, use_case)
        )

    assert exc_info.value.status_code == status_code


@pytest.mark.asyncio
async def test_delete_device_returns_nothing() -> None:
    use_case = _StubUseCase()

    result = await controller.delete_device(
        DEVICE_ID, delete_device_use_case=cast(DeleteDeviceUseCase, use_case)
    )

    assert result is None
    assert use_case.calls == [{"device_id": DEVICE_ID}]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error, status_code",
    [
        (DeviceNotFoundError(DEVICE_ID), 404),
        (DeleteDeviceInUseError(DEVICE_ID), 409),
        (RepositoryError("down"), 500),
    ],
)
async def test_delete_device_error_mapping(error, status_code) -> None:
    use_case = _StubUseCase(error=error)

    with pytest.raises(HTTPException) as exc_info:
        await controller.delete_device(
            DEVICE_ID, delete_device_use_case=cast(DeleteDeviceUseCase, use_case)
        )

    assert exc_info.value.status_code == status_code


@pytest.mark.asyncio
async def test_get_device_by_id(available_device: Device) -> None:
    use_case = _StubUseCase(result=DeviceResponseDTO.from_domain(available_device))

    result = await controller.get_device_by_id(
        DEVICE_ID, get_device_use_case=cast(GetDeviceByIdUseCase, use_case)
    )

    assert result.name == "Galaxy S21"


@pytest.mark.asyncio
async def test_get_device_by_id_not_found_is_404() -> None:
    use_case = _StubUseCase(error=DeviceNotFoundError(DEVICE_ID))

    with pytest.raises(HTTPException) as exc_info:
        await controller.get_device_by_id(
            DEVICE_ID, get_device_use_case=cast(GetDeviceByIdUseCase, use_case)
        )

    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == f"device id {DEVICE_ID} not found"


@pytest.mark.asyncio
async def test_get_devices_passes_filters(available_device: Device) -> None:
    use_case = _StubUseCase(result=[DeviceResponseDTO.from_domain(available_device)])

    result = await controller.get_devices(
        brand="Samsung",
        state=None,
        get_devices_use_case=cast(GetDevicesUseCase, use_case),
    )

    assert len(result) == 1
    assert use_case.calls == [{"brand": "Samsung", "state": None}]


@pytest.mark.asyncio
async def test_get_devices_timeout_is_504() -> None:
    use_case = _StubUseCase(error=RepositoryTimeoutError("slow"))

    with pytest.raises(HTTPException) as exc_info:
        await controller.get_devices(
            brand=None,
            state=None,
            get_devices_use_case=cast(GetDevicesUseCase, use_case),
        )

    assert exc_info.value.status_code == 504
