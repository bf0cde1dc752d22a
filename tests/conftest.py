"""
Shared pytest fixtures for the device manager tests.

Provides fixtures for:
- Settings with shortened simulator timings
- Seeded and empty repositories
- Simulator and service instances with a seeded random source
- Time freezing
"""
import os
import random

import pytest

from iot_device_manager.application.services.device_manager_service import DeviceManagerService
from iot_device_manager.config import AppSettings, SimulatorSettings
from iot_device_manager.infrastructure.repositories.device_repository import InMemoryDeviceRepository
from iot_device_manager.simulation.telemetry_simulator import TelemetrySimulator

# Test environment configuration
os.environ.setdefault("LOG_LEVEL", "DEBUG")


# ============================================================================
# Settings Fixtures
# ============================================================================

@pytest.fixture
def simulator_settings() -> SimulatorSettings:
    """Simulator settings with millisecond timings."""
    return SimulatorSettings(
        initial_delay=0.01,
        tick_interval=0.02,
        command_delay=0.01,
    )


@pytest.fixture
def app_settings(simulator_settings) -> AppSettings:
    return AppSettings(simulator=simulator_settings, run_seconds=0.05)


# ============================================================================
# Repository Fixtures
# ============================================================================

@pytest.fixture
def repository() -> InMemoryDeviceRepository:
    """Repository loaded with the sample fleet."""
    return InMemoryDeviceRepository()


@pytest.fixture
def empty_repository() -> InMemoryDeviceRepository:
    return InMemoryDeviceRepository(seed=False)


# ============================================================================
# Simulator Fixtures
# ============================================================================

@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def simulator(repository, simulator_settings, rng) -> TelemetrySimulator:
    return TelemetrySimulator(repository, simulator_settings, rng=rng)


@pytest.fixture
def events(simulator):
    """Collect every reading and error the simulator raises."""
    collected = {"readings": [], "errors": []}
    simulator.on_reading(collected["readings"].append)
    simulator.on_error(collected["errors"].append)
    return collected


# ============================================================================
# Service Fixtures
# ============================================================================

@pytest.fixture
def service(repository, simulator, app_settings) -> DeviceManagerService:
    return DeviceManagerService(repository, simulator, app_settings)


# ============================================================================
# Utility Fixtures
# ============================================================================

@pytest.fixture
def freeze_time():
    """
    Fixture for freezing time in tests.

    Usage:
        def test_something(freeze_time):
            with freeze_time("2026-01-15 12:00:00"):
                # time is frozen
    """
    from freezegun import freeze_time as _freeze_time
    return _freeze_time
