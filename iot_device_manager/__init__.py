"""
IoT Device Manager.

In-process management of a simulated IoT device fleet: an in-memory device
repository, a timer-driven telemetry simulator and an activity log.
"""
__version__ = "1.0.0"
