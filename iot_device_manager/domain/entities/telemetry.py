"""
Telemetry domain entities.

Readings and errors are ephemeral events raised by the simulator. They are
consumed once by subscribers and never stored by the repository.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Union

from .base import utc_now


class MeasurementKind(str, Enum):
    """Kinds of measurement a device can report."""
    TEMPERATURE = "Temperature"
    HUMIDITY = "Humidity"
    PRESSURE = "Pressure"
    VIBRATION = "Vibration"
    STATUS = "Status"
    POSITION = "Position"
    SPEED = "Speed"
    THROUGHPUT = "Throughput"
    OUTPUT = "Output"
    SETPOINT = "Setpoint"
    LEVEL = "Level"
    COUNT = "Count"


@dataclass(frozen=True)
class TelemetryReading:
    """
    A single simulated data point from a device.
    """
    device_id: str
    data_type: str
    value: Union[int, float]
    unit: str = ""
    device_name: Optional[str] = None
    timestamp: datetime = field(default_factory=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "device_id": self.device_id,
            "device_name": self.device_name,
            "data_type": self.data_type,
            "value": self.value,
            "unit": self.unit,
            "timestamp": self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        return (
            f"{self.device_name or self.device_id} - {self.data_type}: "
            f"{self.value}{self.unit} at {self.timestamp:%H:%M:%S}"
        )


@dataclass(frozen=True)
class TelemetryError:
    """
    A simulated transport failure for a device.
    """
    device_id: str
    message: str
    timestamp: datetime = field(default_factory=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "device_id": self.device_id,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        return f"[ERROR] {self.device_id} - {self.message} at {self.timestamp:%H:%M:%S}"
