"""
Device DTOs - Application Layer

This module defines Data Transfer Objects (DTOs) for device operations.
These DTOs are used to transfer data between the application layer and
the presentation layer (API).
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from devices_api.domain.entities.device import Device, DeviceState


class DeviceRequestDTO(BaseModel):
    """
    Payload used to create or update a device.

    Values are validated by the Device entity, not here, so that every
    violation surfaces as a domain error.
    """

    name: str = Field(..., description="Device name", max_length=255)
    brand: str = Field(..., description="Device brand", max_length=255)
    state: str = Field(
        ...,
        description="Operational state: available, in-use or inactive",
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "iPhone 13 Pro Max",
                "brand": "Apple",
                "state": "available",
            }
        }
    }


class CreateDeviceResponseDTO(BaseModel):
    """Identifier of a newly created device."""

    id: str

    model_config = {
        "json_schema_extra": {
            "example": {"id": "49e6d977-58a6-4424-a058-8d025991b325"}
        }
    }


class DeviceResponseDTO(BaseModel):
    """A device as stored in the system."""

    id: str
    name: str
    brand: str
    state: DeviceState
    created_at: datetime

    @classmethod
    def from_domain(cls, device: Device) -> "DeviceResponseDTO":
        return cls(
            id=device.id,
            name=device.name,
            brand=device.brand,
            state=device.state,
            created_at=device.created_at,
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "49e6d977-58a6-4424-a058-8d025991b325",
                "name": "Galaxy S21",
                "brand": "Samsung",
                "state": "in-use",
                "created_at": "2025-01-10T15:04:05Z",
            }
        }
    }


class UpdateDeviceResponseDTO(BaseModel):
    """Summary of an update: what was applied, what was ignored."""

    updated_fields: List[str] = Field(default_factory=list)
    ignored_fields: List[str] = Field(default_factory=list)
    device: DeviceResponseDTO

    model_config = {
        "json_schema_extra": {
            "example": {
                "updated_fields": ["name"],
                "ignored_fields": ["brand", "state"],
                "device": {
                    "id": "49e6d977-58a6-4424-a058-8d025991b325",
                    "name": "Galaxy S22",
                    "brand": "Samsung",
                    "state": "in-use",
                    "created_at": "2025-01-10T15:04:05Z",
                },
            }
        }
    }
