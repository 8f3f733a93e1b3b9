"""
Devices Router - Presentation Layer

This module defines the FastAPI router for device endpoints and maps
domain and storage errors onto HTTP status codes.
"""

from typing import List, Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, status

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
from devices_api.domain.entities.errors import (
    DeleteDeviceInUseError,
    DeviceNotFoundError,
    DeviceValidationError,
    RepositoryTimeoutError,
)
from devices_api.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/devices", tags=["Devices"])


def _unexpected_error(event: str, exc: Exception, **context: object) -> HTTPException:
    """Log a failure the client cannot fix and build the matching response."""
    logger.error(event, error=str(exc), exc_info=exc, **context)
    if isinstance(exc, RepositoryTimeoutError):
        return HTTPException(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            detail="Device store did not answer in time",
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )


@router.post(
    "",
    response_model=CreateDeviceResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def create_device(
    device_dto: DeviceRequestDTO,
    create_device_use_case: CreateDeviceUseCase = Depends(
        Provide["create_device_use_case"]
    ),
) -> CreateDeviceResponseDTO:
    """
    Register a new device and return its generated identifier.
    """
    try:
        return await create_device_use_case.execute(device_dto=device_dto)
    except DeviceValidationError as e:
        logger.info("devices.create.rejected", error=e.message, details=e.details)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except Exception as e:
        raise _unexpected_error("devices.create.failed", e)


@router.put("/{device_id}", response_model=UpdateDeviceResponseDTO)
@inject
async def update_device(
    device_id: str,
    device_dto: DeviceRequestDTO,
    update_device_use_case: UpdateDeviceUseCase = Depends(
        Provide["update_device_use_case"]
    ),
) -> UpdateDeviceResponseDTO:
    """
    Update name, brand and state of a device.

    While a device is in use only its name changes; a different brand or
    state is reported back in ``ignored_fields``.
    """
    try:
        return await update_device_use_case.execute(
            device_id=device_id, device_dto=device_dto
        )
    except DeviceNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except DeviceValidationError as e:
        logger.info(
            "devices.update.rejected",
            device_id=device_id,
            error=e.message,
            details=e.details,
        )
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except Exception as e:
        raise _unexpected_error("devices.update.failed", e, device_id=device_id)


@router.delete("/{device_id}", status_code=status.HTTP_204_NO_CONTENT)
@inject
async def delete_device(
    device_id: str,
    delete_device_use_case: DeleteDeviceUseCase = Depends(
        Provide["delete_device_use_case"]
    ),
) -> None:
    """
    Delete a device that is not in use.
    """
    try:
        await delete_device_use_case.execute(device_id=device_id)
    except DeviceNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except DeleteDeviceInUseError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="device is in use and cannot be deleted",
        )
    except Exception as e:
        raise _unexpected_error("devices.delete.failed", e, device_id=device_id)


@router.get("/{device_id}", response_model=DeviceResponseDTO)
@inject
async def get_device_by_id(
    device_id: str,
    get_device_use_case: GetDeviceByIdUseCase = Depends(
        Provide["get_device_by_id_use_case"]
    ),
) -> DeviceResponseDTO:
    """
    Get a device by its identifier.
    """
    try:
        return await get_device_use_case.execute(device_id=device_id)
    except DeviceNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except Exception as e:
        raise _unexpected_error("devices.get.failed", e, device_id=device_id)


@router.get("", response_model=List[DeviceResponseDTO])
@inject
async def get_devices(
    brand: Optional[str] = Query(None, description="Filter by brand"),
    state: Optional[str] = Query(
        None, description="Filter by state (available, in-use, inactive)"
    ),
    get_devices_use_case: GetDevicesUseCase = Depends(Provide["get_devices_use_case"]),
) -> List[DeviceResponseDTO]:
    """
    List devices, optionally filtered by brand or by state.

    When both filters are given the brand filter is used.
    """
    try:
        return await get_devices_use_case.execute(brand=brand, state=state)
    except Exception as e:
        raise _unexpected_error("devices.list.failed", e, brand=brand, state=state)
