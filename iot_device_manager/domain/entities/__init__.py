"""
Domain entities for the IoT device manager.
"""
from .base import EventHook, ObservableEntity, utc_now
from .device import Device, DeviceType
from .log_entry import LogEntry, LogLevel
from .telemetry import MeasurementKind, TelemetryError, TelemetryReading

__all__ = [
    # Base
    "EventHook",
    "ObservableEntity",
    "utc_now",
    # Device
    "Device",
    "DeviceType",
    # Activity log
    "LogEntry",
    "LogLevel",
    # Telemetry
    "MeasurementKind",
    "TelemetryError",
    "TelemetryReading",
]
