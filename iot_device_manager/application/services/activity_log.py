"""
Activity log for user and system actions.
"""
import logging
from collections import deque
from typing import Any, Callable, Deque, Iterator, List

from ...domain.entities.base import EventHook
from ...domain.entities.log_entry import LogEntry, LogLevel

logger = logging.getLogger("iot_device_manager.activity")

_LOGGING_LEVELS = {
    LogLevel.INFO: logging.INFO,
    LogLevel.SUCCESS: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


class ActivityLog:
    """
    Append-only log capped at the most recent entries.

    Entries are listed newest first; the oldest entry is evicted once the
    capacity is reached. Every entry is mirrored to the activity logger.
    """

    def __init__(self, max_entries: int = 100):
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.max_entries = max_entries
        self._entries: Deque[LogEntry] = deque(maxlen=max_entries)
        self._added = EventHook("log_added")

    def add(
        self,
        action: str,
        device_name: str,
        details: str,
        level: LogLevel = LogLevel.INFO,
    ) -> LogEntry:
        entry = LogEntry(action=action, device_name=device_name, details=details, level=level)
        self._entries.appendleft(entry)

        logger.log(_LOGGING_LEVELS[level], f"{action} - {device_name}: {details}")
        self._added.publish(entry)
        return entry

    def clear(self) -> None:
        self._entries.clear()

    def entries(self) -> List[LogEntry]:
        """Entries, newest first."""
        return list(self._entries)

    def subscribe(self, callback: Callable[[LogEntry], Any]) -> Callable[[], None]:
        """Subscribe to new entries. Returns an unsubscribe callable."""
        return self._added.subscribe(callback)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(list(self._entries))
