"""
Repository implementations.
"""
from .device_repository import InMemoryDeviceRepository, SAMPLE_DEVICES

__all__ = [
    "InMemoryDeviceRepository",
    "SAMPLE_DEVICES",
]
