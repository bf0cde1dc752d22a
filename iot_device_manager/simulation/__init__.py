"""
Simulated device communication.
"""
from .scheduler import PeriodicTask
from .telemetry_simulator import TelemetrySimulator

__all__ = [
    "PeriodicTask",
    "TelemetrySimulator",
]
