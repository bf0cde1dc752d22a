"""
Application interfaces (ports).
"""
from .repositories import DeviceRepository

__all__ = ["DeviceRepository"]
