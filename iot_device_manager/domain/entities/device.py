"""
Device domain entities.

A device is a managed piece of equipment with connectivity status and
metadata. Devices are owned by the repository; callers work on snapshots.
"""
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Tuple

from .base import ObservableEntity


class DeviceType(str, Enum):
    """Known device types. Devices may also carry any other type string."""
    SENSOR = "Sensor"
    ACTUATOR = "Actuator"
    GATEWAY = "Gateway"
    CONTROLLER = "Controller"
    MONITOR = "Monitor"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["DeviceType"]:
        """Case-insensitive lookup, None for unknown or unset types."""
        if not value:
            return None
        for member in cls:
            if member.value.lower() == value.lower():
                return member
        return None


@dataclass(eq=True)
class Device(ObservableEntity):
    """
    An IoT device record.

    The identifier is assigned once by the repository and cannot be changed
    afterwards. Every other field is mutable in place.
    """
    id: str = ""
    name: str = ""
    device_type: Optional[str] = None
    ip_address: str = ""
    is_online: bool = False
    last_seen: Optional[datetime] = None
    firmware_version: str = ""
    units: str = ""
    location: str = ""

    # Fields copied by an update; id and last_seen are managed by the store
    MUTABLE_FIELDS: ClassVar[Tuple[str, ...]] = (
        "name",
        "device_type",
        "ip_address",
        "firmware_version",
        "units",
        "location",
        "is_online",
    )

    _derived_fields: ClassVar[Dict[str, Tuple[str, ...]]] = {
        "is_online": ("status_text",),
    }

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "id":
            current = self.__dict__.get("id")
            if current and value != current:
                raise AttributeError(
                    f"Device identifier is immutable (already set to {current})"
                )
        super().__setattr__(name, value)

    @property
    def status_text(self) -> str:
        return "Online" if self.is_online else "Offline"

    def snapshot(self) -> "Device":
        """Return a detached copy with no observers attached."""
        return replace(self)

    def apply_changes(self, other: "Device") -> None:
        """Copy all mutable fields from another device."""
        for name in self.MUTABLE_FIELDS:
            setattr(self, name, getattr(other, name))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "device_type": self.device_type,
            "ip_address": self.ip_address,
            "is_online": self.is_online,
            "status": self.status_text,
            "last_seen": self.last_seen.isoformat() if self.last_seen else None,
            "firmware_version": self.firmware_version,
            "units": self.units,
            "location": self.location,
        }
