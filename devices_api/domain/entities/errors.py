"""
Domain Errors

This module defines the error kinds surfaced by the device domain.
Callers distinguish them by type, never by message.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DeviceValidationError(DomainError):
    """Raised when a device violates one of its invariants."""


class InvalidIDError(DeviceValidationError):
    """Raised when a device identifier is not a canonical UUID."""

    def __init__(self, device_id: Any = None):
        super().__init__("invalid uuid", {"id": device_id})


class NameRequiredError(DeviceValidationError):
    def __init__(self) -> None:
        super().__init__("name is required")


class BrandRequiredError(DeviceValidationError):
    def __init__(self) -> None:
        super().__init__("brand is required")


class StateRequiredError(DeviceValidationError):
    def __init__(self) -> None:
        super().__init__("state is required")


class InvalidStateError(DeviceValidationError):
    """Raised when a state is outside the closed DeviceState enumeration."""

    def __init__(self, state: Any = None):
        super().__init__(f"state {state} is invalid", {"state": state})


class DeviceNotFoundError(DomainError):
    """Raised when a device cannot be found."""

    def __init__(self, device_id: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"device id {device_id} not found", details)
        self.device_id = device_id


class DeleteDeviceInUseError(DomainError):
    """Raised when deleting a device that is currently in use."""

    def __init__(self, device_id: str):
        super().__init__("cannot delete a device in use", {"id": device_id})
        self.device_id = device_id


class RepositoryError(Exception):
    """
    Opaque failure of the persistence backend.

    Storage failures keep this type all the way up to the transport and are
    never mapped to a DomainError.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class RepositoryTimeoutError(RepositoryError):
    """Raised when a storage call exceeds its deadline."""
