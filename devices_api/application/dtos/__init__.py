"""
DTOs Package - Application Layer

This package contains Data Transfer Objects (DTOs) used for data exchange
between the application layer and the presentation layer.
"""

from .device_dto import (
    CreateDeviceResponseDTO,
    DeviceRequestDTO,
    DeviceResponseDTO,
    UpdateDeviceResponseDTO,
)
from .health_dto import DependencyStatusDTO, SystemHealthDTO

__all__ = [
    "DeviceRequestDTO",
    "CreateDeviceResponseDTO",
    "DeviceResponseDTO",
    "UpdateDeviceResponseDTO",
    "DependencyStatusDTO",
    "SystemHealthDTO",
]
