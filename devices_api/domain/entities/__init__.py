"""
Domain Entities Package

This package contains the core domain entities and the error taxonomy.
"""

from .device import Device, DeviceState, is_canonical_uuid
from .errors import (
    BrandRequiredError,
    DeleteDeviceInUseError,
    DeviceNotFoundError,
    DeviceValidationError,
    DomainError,
    InvalidIDError,
    InvalidStateError,
    NameRequiredError,
    RepositoryError,
    RepositoryTimeoutError,
    StateRequiredError,
)
from .health import DependencyStatus, ServiceStatus, SystemHealth

__all__ = [
    "Device",
    "DeviceState",
    "is_canonical_uuid",
    "DomainError",
    "DeviceValidationError",
    "InvalidIDError",
    "NameRequiredError",
    "BrandRequiredError",
    "StateRequiredError",
    "InvalidStateError",
    "DeviceNotFoundError",
    "DeleteDeviceInUseError",
    "RepositoryError",
    "RepositoryTimeoutError",
    "DependencyStatus",
    "ServiceStatus",
    "SystemHealth",
]
