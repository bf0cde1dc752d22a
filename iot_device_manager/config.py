"""
Configuration management for the IoT device manager.

Uses Pydantic settings for validation and environment variable support.
"""
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SimulatorSettings(BaseSettings):
    """Telemetry simulator configuration."""

    model_config = SettingsConfigDict(
        env_prefix='SIMULATOR_',
        env_file='.env',
        extra='ignore'
    )

    initial_delay: float = Field(default=1.0, ge=0, description='Delay before the first tick (seconds)')
    tick_interval: float = Field(default=3.0, gt=0, description='Time between ticks (seconds)')
    error_rate_percent: int = Field(default=10, ge=0, le=100, description='Chance of a connection error per tick')
    command_delay: float = Field(default=0.5, ge=0, description='Simulated command latency (seconds)')
    command_failure_percent: int = Field(default=15, ge=0, le=100, description='Chance a command fails')
    seed: Optional[int] = Field(default=None, description='Random seed for reproducible runs')


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore'
    )

    # Application
    app_name: str = Field(default='IoT Device Manager')
    app_version: str = Field(default='1.0.0')

    # Logging
    log_level: str = Field(default='INFO')

    # Rolling buffers
    max_log_entries: int = Field(default=100, gt=0, description='Activity log capacity')
    max_realtime_entries: int = Field(default=50, gt=0, description='Realtime feed capacity')

    # Repository
    seed_sample_data: bool = Field(default=True, description='Populate the store with sample devices')

    # Runner
    run_seconds: Optional[float] = Field(default=None, description='Stop the runner after this many seconds')

    # Sub-settings
    simulator: SimulatorSettings = Field(default_factory=SimulatorSettings)


@lru_cache()
def get_settings() -> AppSettings:
    """
    Get cached application settings.

    Uses LRU cache to avoid re-reading environment variables on every access.
    """
    return AppSettings()
