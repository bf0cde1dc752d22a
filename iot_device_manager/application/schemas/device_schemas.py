"""
Pydantic schemas for device input.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...domain.entities.device import Device, DeviceType


class DeviceForm(BaseModel):
    """Validated input for creating or editing a device."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100)
    device_type: str = Field(default=DeviceType.SENSOR.value)
    ip_address: str = Field(..., min_length=1, max_length=64)
    location: str = Field(..., min_length=1, max_length=200)
    units: str = Field(default="N/A")
    firmware_version: str = Field(default="v1.0.0")
    is_online: bool = False

    @field_validator("device_type", mode="before")
    @classmethod
    def default_device_type(cls, value: Optional[str]) -> str:
        return value or DeviceType.SENSOR.value

    @field_validator("units", mode="before")
    @classmethod
    def default_units(cls, value: Optional[str]) -> str:
        if value is None or not str(value).strip():
            return "N/A"
        return value

    def to_entity(self) -> Device:
        """Build a new, unidentified device from the form."""
        return Device(
            name=self.name,
            device_type=self.device_type,
            ip_address=self.ip_address,
            location=self.location,
            units=self.units,
            firmware_version=self.firmware_version,
            is_online=self.is_online,
        )

    def apply_to(self, device: Device) -> Device:
        """Write the form values onto an existing device."""
        device.apply_changes(self.to_entity())
        return device

    @classmethod
    def from_entity(cls, device: Device) -> "DeviceForm":
        return cls(
            name=device.name,
            device_type=device.device_type,
            ip_address=device.ip_address,
            location=device.location,
            units=device.units,
            firmware_version=device.firmware_version,
            is_online=device.is_online,
        )


class DeviceResponse(BaseModel):
    """Serializable view of a stored device."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    device_type: Optional[str] = None
    ip_address: str
    is_online: bool
    status_text: str
    last_seen: Optional[datetime] = None
    firmware_version: str
    units: str
    location: str
