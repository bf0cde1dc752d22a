"""
In-memory device repository.

Holds the single owned device store. Callers receive snapshot copies, so
nothing outside the repository can mutate stored devices directly.
"""
import logging
from dataclasses import replace
from datetime import timedelta
from typing import Any, Callable, Dict, List, Optional
from uuid import uuid4

from ...application.interfaces.repositories import DeviceRepository
from ...domain.entities.base import EventHook, utc_now
from ...domain.entities.device import Device, DeviceType

logger = logging.getLogger(__name__)


# Sample fleet loaded at startup, with last-seen offsets relative to now
SAMPLE_DEVICES: List[Dict[str, Any]] = [
    {
        "name": "Temperature",
        "device_type": DeviceType.SENSOR.value,
        "ip_address": "192.168.1.101",
        "is_online": True,
        "last_seen_offset": timedelta(0),
        "firmware_version": "v1.2.3",
        "units": "°C",
        "location": "Production Floor A",
    },
    {
        "name": "Humidity",
        "device_type": DeviceType.SENSOR.value,
        "ip_address": "192.168.1.102",
        "is_online": True,
        "last_seen_offset": timedelta(minutes=5),
        "firmware_version": "v1.2.1",
        "units": "%",
        "location": "Production Floor B",
    },
    {
        "name": "Sn Actuator",
        "device_type": DeviceType.ACTUATOR.value,
        "ip_address": "192.168.1.201",
        "is_online": False,
        "last_seen_offset": timedelta(hours=2),
        "firmware_version": "v2.0.0",
        "units": "N/A",
        "location": "Assembly Line 1",
    },
    {
        "name": "Ga Gateway",
        "device_type": DeviceType.GATEWAY.value,
        "ip_address": "192.168.1.1",
        "is_online": True,
        "last_seen_offset": timedelta(seconds=30),
        "firmware_version": "v3.1.0",
        "units": "N/A",
        "location": "Server Room",
    },
    {
        "name": "Pr Sensor",
        "device_type": DeviceType.SENSOR.value,
        "ip_address": "192.168.1.103",
        "is_online": False,
        "last_seen_offset": timedelta(days=1),
        "firmware_version": "v1.0.5",
        "units": "kPa",
        "location": "Quality Control Lab",
    },
]


class InMemoryDeviceRepository(DeviceRepository):
    """
    Device repository backed by an insertion-ordered dict.

    All operations are synchronous. The intended caller is a single
    event loop, so no locking is done.
    """

    def __init__(self, seed: bool = True):
        """
        Initialize the repository.

        Args:
            seed: Load the sample fleet.
        """
        self._devices: Dict[str, Device] = {}
        self._observers = EventHook("device_changed")

        if seed:
            self._load_sample_data()

    def _load_sample_data(self) -> None:
        now = utc_now()
        for sample in SAMPLE_DEVICES:
            data = dict(sample)
            offset = data.pop("last_seen_offset")
            self._store(Device(id=str(uuid4()), last_seen=now - offset, **data))

        logger.info(f"Loaded {len(SAMPLE_DEVICES)} sample devices")

    def _store(self, device: Device) -> None:
        device.subscribe(self._forward_change)
        self._devices[device.id] = device

    def _forward_change(self, device: Device, field_name: str) -> None:
        self._observers.publish(device.snapshot(), field_name)

    def _new_id(self) -> str:
        device_id = str(uuid4())
        while device_id in self._devices:
            device_id = str(uuid4())
        return device_id

    def list(self) -> List[Device]:
        return [device.snapshot() for device in self._devices.values()]

    def get(self, device_id: str) -> Optional[Device]:
        device = self._devices.get(device_id)
        return device.snapshot() if device else None

    def add(self, device: Device) -> bool:
        if device is None or not device.name:
            logger.warning("Rejected device without a name")
            return False

        device_id = self._new_id()
        now = utc_now()

        self._store(replace(device, id=device_id, last_seen=now))

        # Hand the identity back to the caller's record
        if not device.id:
            device.id = device_id
            device.last_seen = now

        logger.info(f"Added device {device_id} ({device.name})")
        return True

    def update(self, device: Device) -> bool:
        if device is None:
            return False

        existing = self._devices.get(device.id)
        if existing is None:
            logger.warning(f"Cannot update unknown device {device.id!r}")
            return False

        existing.apply_changes(device)
        existing.last_seen = utc_now()

        logger.info(f"Updated device {device.id} ({existing.name})")
        return True

    def delete(self, device_id: str) -> bool:
        device = self._devices.pop(device_id, None)
        if device is None:
            logger.warning(f"Cannot delete unknown device {device_id!r}")
            return False

        device.unsubscribe(self._forward_change)
        logger.info(f"Deleted device {device_id} ({device.name})")
        return True

    def toggle_status(self, device_id: str) -> bool:
        device = self._devices.get(device_id)
        if device is None:
            logger.warning(f"Cannot toggle unknown device {device_id!r}")
            return False

        device.is_online = not device.is_online
        device.last_seen = utc_now()

        logger.debug(f"Device {device_id} is now {device.status_text}")
        return True

    def subscribe(self, observer: Callable[[Device, str], Any]) -> Callable[[], None]:
        return self._observers.subscribe(observer)

    def __len__(self) -> int:
        return len(self._devices)

    def __contains__(self, device_id: object) -> bool:
        return device_id in self._devices
