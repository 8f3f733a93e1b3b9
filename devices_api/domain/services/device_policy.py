"""
Domain service deciding which device changes are allowed.

Pure functions: they inspect and mutate the in-memory entity handed to
them and never touch storage.
"""

from dataclasses import dataclass, field
from typing import List, Union

from devices_api.domain.entities.device import Device, DeviceState
from devices_api.domain.entities.errors import (
    BrandRequiredError,
    DeleteDeviceInUseError,
    InvalidStateError,
    NameRequiredError,
)

FIELD_NAME = "name"
FIELD_BRAND = "brand"
FIELD_STATE = "state"


@dataclass
class DeviceUpdatePlan:
    """Outcome of applying an update request to a device."""

    device: Device
    updated_fields: List[str] = field(default_factory=list)
    ignored_fields: List[str] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.updated_fields)


def _requested_state(
    device: Device, state: Union[DeviceState, str, None]
) -> Union[DeviceState, None]:
    """
    Resolve the requested state, or None when it equals the current one.

    Raises:
        InvalidStateError: If the state differs and is not a known value.
    """
    if state == device.state:
        return None
    if not DeviceState.is_valid(state):
        raise InvalidStateError(state)
    return DeviceState.parse(state)


def plan_device_update(
    device: Device,
    name: str,
    brand: str,
    state: Union[DeviceState, str],
) -> DeviceUpdatePlan:
    """
    Apply the allowed part of an update request to ``device``.

    While the device is in use only its name may change: a different brand
    or state is left untouched and reported as ignored. Otherwise every
    field that differs is applied. Fields equal to the current value are
    reported in neither list.

    Args:
        device: The stored device, already loaded
        name: Requested name
        brand: Requested brand
        state: Requested state

    Returns:
        DeviceUpdatePlan with the mutated device and the field lists, in
        name, brand, state order.

    Raises:
        InvalidStateError: If the requested state differs from the current
            one and is not valid.
        NameRequiredError: If the requested name is empty.
        BrandRequiredError: If an empty brand would be applied.

    On any error ``device`` is left exactly as it was.
    """
    new_state = _requested_state(device, state)
    if not name:
        raise NameRequiredError()
    if not brand and not device.is_in_use():
        raise BrandRequiredError()

    plan = DeviceUpdatePlan(device=device)

    if name != device.name:
        device.name = name
        plan.updated_fields.append(FIELD_NAME)

    if device.is_in_use():
        if brand != device.brand:
            plan.ignored_fields.append(FIELD_BRAND)
        if new_state is not None:
            plan.ignored_fields.append(FIELD_STATE)
    else:
        if brand != device.brand:
            device.brand = brand
            plan.updated_fields.append(FIELD_BRAND)
        if new_state is not None:
            device.set_state(new_state)
            plan.updated_fields.append(FIELD_STATE)

    device.validate()
    return plan


def ensure_device_deletable(device: Device) -> None:
    """
    Raises:
        DeleteDeviceInUseError: If the device is currently in use.
    """
    if device.is_in_use():
        raise DeleteDeviceInUseError(device.id)
