"""
Input and output schemas.
"""
from .device_schemas import DeviceForm, DeviceResponse

__all__ = [
    "DeviceForm",
    "DeviceResponse",
]
