"""
Telemetry simulator.

Manufactures sensor readings and connection errors for online devices on a
fixed schedule, and simulates sending commands with network latency.
"""
import asyncio
import logging
import random
from typing import Any, Callable, Dict, Optional

from ..application.interfaces.repositories import DeviceRepository
from ..config import SimulatorSettings
from ..domain.entities.base import EventHook
from ..domain.entities.device import Device
from ..domain.entities.telemetry import TelemetryError, TelemetryReading
from . import measurements
from .scheduler import PeriodicTask

logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = "Connection timeout - device not responding"
UNKNOWN_DEVICE_ID = "UNKNOWN"
FALLBACK_DEVICE_ID = "SIMULATED_DEVICE"
FALLBACK_SENSOR_COUNT = 5


class TelemetrySimulator:
    """
    Simulated device communication.

    States:
    - Stopped (initial): no ticks fire
    - Running: one tick every `tick_interval` seconds after `initial_delay`

    Each tick with online devices raises exactly one event: a reading or
    a connection error. Events are delivered synchronously to subscribers
    on the event loop thread.
    """

    def __init__(
        self,
        repository: Optional[DeviceRepository] = None,
        settings: Optional[SimulatorSettings] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the simulator.

        Args:
            repository: Source of devices. Without one, ticks produce
                free-form readings for made-up sensors.
            settings: Simulator settings.
            rng: Random source, seeded from settings when omitted.
        """
        self.settings = settings or SimulatorSettings()
        self._repository = repository
        self._rng = rng or random.Random(self.settings.seed)

        self._readings = EventHook("reading")
        self._errors = EventHook("error")

        self._timer = PeriodicTask(
            self.tick,
            interval=self.settings.tick_interval,
            initial_delay=self.settings.initial_delay,
            name="telemetry_simulator",
        )

        self._reading_count = 0
        self._error_count = 0

    @property
    def is_running(self) -> bool:
        return self._timer.is_running

    def set_repository(self, repository: Optional[DeviceRepository]) -> None:
        """Set the repository to read online devices from."""
        self._repository = repository

    # =========================================================================
    # Subscriptions
    # =========================================================================

    def on_reading(self, callback: Callable[[TelemetryReading], Any]) -> Callable[[], None]:
        """Subscribe to reading events. Returns an unsubscribe callable."""
        return self._readings.subscribe(callback)

    def on_error(self, callback: Callable[[TelemetryError], Any]) -> Callable[[], None]:
        """Subscribe to error events. Returns an unsubscribe callable."""
        return self._errors.subscribe(callback)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def start(self) -> None:
        """Start the periodic tick. No-op when already running."""
        if self._timer.start():
            logger.info(
                f"Telemetry simulation started "
                f"(every {self.settings.tick_interval}s)"
            )

    async def stop(self) -> None:
        """Stop the periodic tick. No further events fire once this returns."""
        if not self._timer.is_running:
            return

        await self._timer.stop()
        logger.info("Telemetry simulation stopped")

    # =========================================================================
    # Tick
    # =========================================================================

    def tick(self) -> None:
        """
        Run one simulation step.

        Faults are turned into an error event for device "UNKNOWN" so the
        schedule is never broken by a single bad tick.
        """
        try:
            if self._repository is None:
                self._simulate_unbound()
            else:
                self._simulate_from_repository()
        except Exception as e:
            logger.error(f"Error in simulation tick: {e}")
            self._emit_error(UNKNOWN_DEVICE_ID, f"Communication error: {e}")

    def _simulate_from_repository(self) -> None:
        online = [d for d in self._repository.list() if d.is_online]
        if not online:
            return

        device = self._rng.choice(online)

        if self._connection_failed():
            self._emit_error(device.id, TIMEOUT_MESSAGE)
            return

        self._emit_reading(self.read_device(device))

    def _simulate_unbound(self) -> None:
        if self._connection_failed():
            self._emit_error(FALLBACK_DEVICE_ID, TIMEOUT_MESSAGE)
            return

        sensor = self._rng.randint(1, FALLBACK_SENSOR_COUNT)
        self._emit_reading(TelemetryReading(
            device_id=f"SENSOR_{sensor:02d}",
            data_type=measurements.random_kind(self._rng).value,
            value=round(self._rng.random() * 100, 2),
            unit=measurements.random_unit(self._rng),
        ))

    def _connection_failed(self) -> bool:
        return self._rng.randrange(100) < self.settings.error_rate_percent

    def read_device(self, device: Device) -> TelemetryReading:
        """
        Build a reading for a device.

        The kind follows the device's type and name; value and unit follow
        the kind.
        """
        kind = measurements.choose_kind(device, self._rng)
        return TelemetryReading(
            device_id=device.id,
            device_name=device.name,
            data_type=kind.value,
            value=measurements.generate_value(kind, self._rng),
            unit=measurements.unit_for(kind),
        )

    def _emit_reading(self, reading: TelemetryReading) -> None:
        self._reading_count += 1
        logger.debug(f"Reading: {reading}")
        self._readings.publish(reading)

    def _emit_error(self, device_id: str, message: str) -> None:
        self._error_count += 1
        logger.debug(f"Connection error for {device_id}: {message}")
        self._errors.publish(TelemetryError(device_id=device_id, message=message))

    # =========================================================================
    # Commands
    # =========================================================================

    async def send_command(self, device_id: str, command: str) -> bool:
        """
        Simulate sending a command to a device.

        Always waits for the simulated network delay. Failures raise an
        error event and are not retried.

        Args:
            device_id: Target device.
            command: Command text.

        Returns:
            True if the device accepted the command.
        """
        await asyncio.sleep(self.settings.command_delay)

        if self._rng.randrange(100) < self.settings.command_failure_percent:
            logger.warning(f"Command '{command}' to {device_id} failed")
            self._emit_error(
                device_id,
                f"Failed to send command '{command}' - device unreachable",
            )
            return False

        logger.debug(f"Command '{command}' delivered to {device_id}")
        return True

    def get_stats(self) -> Dict[str, Any]:
        return {
            "running": self.is_running,
            "readings": self._reading_count,
            "errors": self._error_count,
            "timer": self._timer.get_stats(),
        }
