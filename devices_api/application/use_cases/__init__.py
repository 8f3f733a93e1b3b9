"""
Use Cases Package - Application Layer

Each use case is a small class with an async ``execute`` method and its
collaborators injected through the container.
"""

from .device_use_cases import (
    CreateDeviceUseCase,
    DeleteDeviceUseCase,
    GetDeviceByIdUseCase,
    GetDevicesUseCase,
    UpdateDeviceUseCase,
)
from .health_use_cases import GetHealthStatusUseCase

__all__ = [
    "CreateDeviceUseCase",
    "UpdateDeviceUseCase",
    "DeleteDeviceUseCase",
    "GetDeviceByIdUseCase",
    "GetDevicesUseCase",
    "GetHealthStatusUseCase",
]
