"""
Application services.
"""
from .activity_log import ActivityLog
from .device_manager_service import DeviceManagerService

__all__ = [
    "ActivityLog",
    "DeviceManagerService",
]
