"""
Activity log entities.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .base import utc_now


class LogLevel(str, Enum):
    """Severity of an activity log entry."""
    INFO = "Info"
    WARNING = "Warning"
    ERROR = "Error"
    SUCCESS = "Success"


@dataclass(frozen=True)
class LogEntry:
    """
    An immutable record of an application action.
    """
    action: str
    device_name: str
    details: str
    level: LogLevel = LogLevel.INFO
    timestamp: datetime = field(default_factory=utc_now)

    def __str__(self) -> str:
        return (
            f"[{self.timestamp:%Y-%m-%d %H:%M:%S}] [{self.level.value}] "
            f"{self.action} - {self.device_name}: {self.details}"
        )
