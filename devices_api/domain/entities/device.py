"""
Domain Entities - Device

This module defines the Device entity and its closed set of operational
states. The entity validates itself on construction and guards every
state change; it has no persistence behaviour of its own.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Union
from uuid import UUID, uuid4

from .errors import (
    BrandRequiredError,
    DeviceValidationError,
    InvalidIDError,
    InvalidStateError,
    NameRequiredError,
    StateRequiredError,
)


class DeviceState(str, Enum):
    """Operational state of a device."""

    AVAILABLE = "available"
    IN_USE = "in-use"
    INACTIVE = "inactive"

    @classmethod
    def parse(cls, value: Union["DeviceState", str, None]) -> "DeviceState":
        """
        Convert a raw value into a DeviceState.

        Raises:
            StateRequiredError: If the value is empty
            InvalidStateError: If the value is not a known state
        """
        if isinstance(value, cls):
            return value
        if not value:
            raise StateRequiredError()
        try:
            return cls(value)
        except ValueError:
            raise InvalidStateError(value) from None

    @classmethod
    def is_valid(cls, value: Any) -> bool:
        try:
            cls.parse(value)
        except DeviceValidationError:
            return False
        return True


def is_canonical_uuid(value: Any) -> bool:
    """Return True for lowercase, hyphenated UUID strings."""
    if not isinstance(value, str):
        return False
    try:
        return str(UUID(value)) == value
    except ValueError:
        return False


def _check_invariants(
    device_id: Any, name: Any, brand: Any, state: Any
) -> DeviceState:
    # Order matters: the first failing field decides the error kind.
    if not device_id or not is_canonical_uuid(device_id):
        raise InvalidIDError(device_id)
    if not name:
        raise NameRequiredError()
    if not brand:
        raise BrandRequiredError()
    return DeviceState.parse(state)


class Device:
    """
    A physical device tracked by the inventory.

    ``id`` and ``created_at`` are fixed at construction. ``state`` can only
    be changed through :meth:`set_state`. ``name`` and ``brand`` are plain
    attributes; :meth:`validate` must pass before the device is persisted.
    """

    __slots__ = ("_id", "name", "brand", "_state", "_created_at")

    def __init__(
        self,
        name: str,
        brand: str,
        state: Union[DeviceState, str],
        id: str = "",
        created_at: Optional[datetime] = None,
    ):
        """
        Build a validated device.

        Args:
            name: Display name, must not be empty
            brand: Manufacturer, must not be empty
            state: One of the DeviceState values
            id: Canonical UUID; a new one is generated when empty
            created_at: Creation time; defaults to now (UTC)

        Raises:
            DeviceValidationError: On the first violated invariant; no
                device is produced.
        """
        device_id = id or str(uuid4())
        parsed_state = _check_invariants(device_id, name, brand, state)

        if created_at is None:
            created_at = datetime.now(timezone.utc)
        elif created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)

        self._id = device_id
        self.name = name
        self.brand = brand
        self._state = parsed_state
        self._created_at = created_at

    @property
    def id(self) -> str:
        return self._id

    @property
    def state(self) -> DeviceState:
        return self._state

    @property
    def created_at(self) -> datetime:
        return self._created_at

    def set_state(self, new_state: Union[DeviceState, str]) -> None:
        """
        Move the device to another state.

        Raises:
            InvalidStateError: If ``new_state`` is not a DeviceState value;
                the device is left unchanged.
        """
        try:
            parsed = DeviceState.parse(new_state)
        except StateRequiredError:
            raise InvalidStateError(new_state) from None
        self._state = parsed

    def is_in_use(self) -> bool:
        return self._state is DeviceState.IN_USE

    def validate(self) -> None:
        """Re-check every invariant, raising the first violation found."""
        _check_invariants(self._id, self.name, self.brand, self._state)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Device):
            return NotImplemented
        return (
            self._id == other._id
            and self.name == other.name
            and self.brand == other.brand
            and self._state is other._state
            and self._created_at == other._created_at
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Device(id={self._id!r}, name={self.name!r}, brand={self.brand!r}, "
            f"state={self._state.value!r}, created_at={self._created_at.isoformat()})"
        )
