"""
IoT Device Manager - Main Entry Point.

Runs the device manager headless:
1. Loads the sample fleet into the in-memory repository
2. Starts the telemetry simulator
3. Logs readings, errors and activity until interrupted
"""
import asyncio
import logging
import signal
import sys
from typing import Any, Dict, Optional

from .application.schemas.device_schemas import DeviceResponse
from .application.services.device_manager_service import DeviceManagerService
from .config import AppSettings, get_settings
from .infrastructure.repositories.device_repository import InMemoryDeviceRepository
from .simulation.telemetry_simulator import TelemetrySimulator

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )


def build_service(settings: Optional[AppSettings] = None) -> DeviceManagerService:
    """Wire the repository, simulator and service together."""
    settings = settings or get_settings()
    repository = InMemoryDeviceRepository(seed=settings.seed_sample_data)
    simulator = TelemetrySimulator(repository, settings.simulator)
    return DeviceManagerService(repository, simulator, settings)


def setup_signal_handlers(
    shutdown_event: asyncio.Event,
    loop: asyncio.AbstractEventLoop,
) -> Dict[signal.Signals, Any]:
    """
    Setup signal handlers for graceful shutdown.

    Returns:
        Installed signals mapped to the handler they replaced, or to None
        when the handler was added to the event loop.
    """
    def signal_handler():
        logger.info("Received shutdown signal")
        shutdown_event.set()

    installed: Dict[signal.Signals, Any] = {}
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, signal_handler)
            installed[sig] = None
        except NotImplementedError:
            # Windows doesn't support add_signal_handler
            previous = signal.signal(
                sig, lambda s, f: loop.call_soon_threadsafe(signal_handler)
            )
            installed[sig] = previous or signal.SIG_DFL
    return installed


def remove_signal_handlers(
    installed: Dict[signal.Signals, Any],
    loop: asyncio.AbstractEventLoop,
) -> None:
    """Undo setup_signal_handlers."""
    for sig, previous in installed.items():
        if previous is None:
            loop.remove_signal_handler(sig)
        else:
            signal.signal(sig, previous)


async def main(settings: Optional[AppSettings] = None) -> DeviceManagerService:
    """Main entry point."""
    settings = settings or get_settings()
    service = build_service(settings)

    for device in service.devices:
        logger.info(f"Device: {DeviceResponse.model_validate(device).model_dump(exclude={'last_seen'})}")

    loop = asyncio.get_running_loop()
    shutdown_event = asyncio.Event()
    installed = setup_signal_handlers(shutdown_event, loop)

    await service.start_communication()
    try:
        await asyncio.wait_for(shutdown_event.wait(), timeout=settings.run_seconds)
    except asyncio.TimeoutError:
        logger.info(f"Run time of {settings.run_seconds}s elapsed")
    finally:
        remove_signal_handlers(installed, loop)
        await service.stop_communication()
        await service.shutdown()

    logger.info(
        f"Stopped with {service.online_count} online / {service.offline_count} offline devices, "
        f"{len(service.logs)} log entries"
    )
    return service


def run() -> None:
    """Console script entry point."""
    settings = get_settings()
    configure_logging(settings.log_level)
    asyncio.run(main(settings))


if __name__ == "__main__":
    run()
