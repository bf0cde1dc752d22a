"""
Device Manager Service.

Headless application logic behind the device manager window: device CRUD
with activity logging, the realtime telemetry feed and the fleet counters.
"""
import logging
from collections import deque
from dataclasses import replace
from typing import Deque, List, Optional

from ...config import AppSettings, get_settings
from ...domain.entities.device import Device
from ...domain.entities.log_entry import LogEntry, LogLevel
from ...domain.entities.telemetry import TelemetryError, TelemetryReading
from ...simulation.telemetry_simulator import TelemetrySimulator
from ..interfaces.repositories import DeviceRepository
from ..schemas.device_schemas import DeviceForm
from .activity_log import ActivityLog

logger = logging.getLogger(__name__)

SYSTEM = "System"


class DeviceManagerService:
    """
    Application service for the device manager.

    Coordinates the repository and the telemetry simulator, and keeps the
    rolling buffers a user interface would display. Holds no copy of the
    device list beyond the last snapshot.
    """

    def __init__(
        self,
        repository: DeviceRepository,
        simulator: TelemetrySimulator,
        settings: Optional[AppSettings] = None,
    ):
        self.settings = settings or get_settings()
        self._repository = repository
        self._simulator = simulator
        self._simulator.set_repository(repository)

        self.activity_log = ActivityLog(self.settings.max_log_entries)
        self._realtime: Deque[str] = deque(maxlen=self.settings.max_realtime_entries)

        self._devices: List[Device] = []
        self.online_count = 0
        self.offline_count = 0
        self.status_message = ""

        self._unsubscribers = [
            self._simulator.on_reading(self._on_data_received),
            self._simulator.on_error(self._on_connection_error),
            self._repository.subscribe(self._on_device_changed),
        ]

        self._load_devices()
        self._update_device_stats()
        self._log(
            "Application Started", SYSTEM,
            f"{self.settings.app_name} v{self.settings.app_version} initialized",
            LogLevel.SUCCESS,
        )

    # =========================================================================
    # Read side
    # =========================================================================

    @property
    def devices(self) -> List[Device]:
        return list(self._devices)

    @property
    def logs(self) -> List[LogEntry]:
        return self.activity_log.entries()

    @property
    def realtime_data(self) -> List[str]:
        return list(self._realtime)

    @property
    def is_communicating(self) -> bool:
        return self._simulator.is_running

    def _load_devices(self) -> None:
        self._devices = self._repository.list()

    def _update_device_stats(self) -> None:
        self.online_count = sum(1 for d in self._devices if d.is_online)
        self.offline_count = len(self._devices) - self.online_count

    # =========================================================================
    # Device operations
    # =========================================================================

    def add_device(self, device: Device) -> Optional[Device]:
        """
        Store a device as a new entry.

        An already identified device is copied without its id, so the store
        always assigns the identity of the new entry.

        Returns:
            The new device carrying its assigned id, or None if the
            repository rejected it.
        """
        if device is not None and device.id:
            device = replace(device, id="")

        if not self._repository.add(device):
            self.status_message = "Device name is required"
            return None

        self._load_devices()
        self._log(
            "Device Added", device.name,
            f"New device created with ID: {device.id}", LogLevel.SUCCESS,
        )
        self._update_device_stats()
        self.status_message = f"Device '{device.name}' added successfully"
        return device

    def add_device_from_form(self, form: DeviceForm) -> Optional[Device]:
        """Create a device from validated form input."""
        return self.add_device(form.to_entity())

    def device_form(self, device_id: str) -> Optional[DeviceForm]:
        """Form pre-filled with a stored device, for editing."""
        device = self._repository.get(device_id)
        return DeviceForm.from_entity(device) if device else None

    def update_device_from_form(self, device_id: str, form: DeviceForm) -> bool:
        """Overwrite a stored device with validated form input."""
        device = self._repository.get(device_id)
        if device is None:
            return False
        return self.update_device(form.apply_to(device))

    def update_device(self, device: Device) -> bool:
        if not self._repository.update(device):
            return False

        self._load_devices()
        self._log("Device Updated", device.name, "Device information modified")
        self._update_device_stats()
        self.status_message = f"Device '{device.name}' updated successfully"
        return True

    def delete_device(self, device_id: str) -> bool:
        device = self._repository.get(device_id)
        if device is None or not self._repository.delete(device_id):
            return False

        self._load_devices()
        self._log("Device Deleted", device.name, "Device removed from system", LogLevel.WARNING)
        self._update_device_stats()
        self.status_message = f"Device '{device.name}' deleted"
        return True

    def toggle_status(self, device_id: str) -> bool:
        if not self._repository.toggle_status(device_id):
            return False

        device = self._repository.get(device_id)
        self._load_devices()
        self._log("Status Changed", device.name, f"Device status changed to {device.status_text}")
        self._update_device_stats()
        self.status_message = f"{device.name} is now {device.status_text}"
        return True

    def refresh_devices(self) -> None:
        self._load_devices()
        self._update_device_stats()
        self._log(
            "Devices Refreshed", SYSTEM,
            f"Device list updated - {len(self._devices)} devices loaded",
        )
        self.status_message = "Device list refreshed"

    def clear_logs(self) -> None:
        self.activity_log.clear()
        self._log("Logs Cleared", SYSTEM, "Log history cleared by user")

    # =========================================================================
    # Communication
    # =========================================================================

    async def start_communication(self) -> None:
        await self._simulator.start()
        self._log(
            "Communication Started", SYSTEM,
            "Real-time device communication enabled", LogLevel.SUCCESS,
        )
        self.status_message = "Real-time communication started"

    async def stop_communication(self) -> None:
        await self._simulator.stop()
        self._log(
            "Communication Stopped", SYSTEM,
            "Real-time device communication disabled", LogLevel.WARNING,
        )
        self.status_message = "Real-time communication stopped"

    async def send_command(self, device_id: str, command: str) -> bool:
        """
        Send a command through the simulator.

        Failures are logged by the error event handler.
        """
        device = self._repository.get(device_id)
        name = device.name if device else device_id

        if not await self._simulator.send_command(device_id, command):
            return False

        self._log("Command Sent", name, f"Command '{command}' acknowledged", LogLevel.SUCCESS)
        self.status_message = f"Command '{command}' sent to {name}"
        return True

    async def shutdown(self) -> None:
        """Stop communication and detach from the simulator and repository."""
        await self._simulator.stop()
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    # =========================================================================
    # Event handlers
    # =========================================================================

    def _on_data_received(self, reading: TelemetryReading) -> None:
        self._realtime.appendleft(
            f"[{reading.timestamp:%H:%M:%S}] {reading.device_id}: "
            f"{reading.data_type} = {reading.value}{reading.unit}"
        )
        self._log(
            "Data Received", reading.device_id,
            f"{reading.data_type}: {reading.value}{reading.unit}",
        )

    def _on_connection_error(self, error: TelemetryError) -> None:
        self._log("Connection Error", error.device_id, error.message, LogLevel.ERROR)
        self.status_message = f"Error: {error.message}"

    def _on_device_changed(self, device: Device, field_name: str) -> None:
        if field_name != "is_online":
            return
        self._load_devices()
        self._update_device_stats()

    def _log(
        self,
        action: str,
        device_name: str,
        details: str,
        level: LogLevel = LogLevel.INFO,
    ) -> LogEntry:
        return self.activity_log.add(action, device_name, details, level)
