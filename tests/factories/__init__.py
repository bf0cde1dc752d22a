"""
Test data factories.

Provides factory classes for generating test data.
"""
from .device_factory import (
    DeviceFactory,
    OfflineDeviceFactory,
    SensorFactory,
    TemperatureSensorFactory,
)
from .telemetry_factory import TelemetryErrorFactory, TelemetryReadingFactory

__all__ = [
    "DeviceFactory",
    "OfflineDeviceFactory",
    "SensorFactory",
    "TemperatureSensorFactory",
    "TelemetryErrorFactory",
    "TelemetryReadingFactory",
]
