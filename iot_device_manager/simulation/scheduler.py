"""
Periodic task scheduling on asyncio.

A cancellable repeating timer that invokes a synchronous callback at a
fixed rate. Cancellation is synchronous: once stop() returns, the callback
never runs again.
"""
import asyncio
import logging
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)


class PeriodicTask:
    """
    Runs a callback on a fixed schedule inside the running event loop.

    The callback body is synchronous, so two invocations never overlap.
    Exceptions escaping the callback are logged and the schedule continues.
    """

    def __init__(
        self,
        callback: Callable[[], Any],
        interval: float,
        initial_delay: float = 0.0,
        name: str = "periodic_task",
    ):
        """
        Initialize the task.

        Args:
            callback: Function invoked on every tick.
            interval: Time between ticks in seconds.
            initial_delay: Time before the first tick in seconds.
            name: Name used for the asyncio task and in logs.
        """
        if interval <= 0:
            raise ValueError("interval must be positive")

        self.callback = callback
        self.interval = interval
        self.initial_delay = initial_delay
        self.name = name

        self._task: Optional[asyncio.Task] = None
        self._tick_count = 0
        self._error_count = 0

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def tick_count(self) -> int:
        return self._tick_count

    def start(self) -> bool:
        """
        Start ticking. Must be called with an event loop running.

        Returns:
            False if the task was already running.
        """
        if self.is_running:
            return False

        self._task = asyncio.get_running_loop().create_task(
            self._run(),
            name=self.name,
        )
        logger.debug(
            f"{self.name} started (interval={self.interval}s, "
            f"initial_delay={self.initial_delay}s)"
        )
        return True

    async def stop(self) -> None:
        """Cancel the schedule and wait until it has fully stopped."""
        task, self._task = self._task, None
        if task is None or task.done():
            return

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

        logger.debug(f"{self.name} stopped after {self._tick_count} ticks")

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        next_at = loop.time() + self.initial_delay

        while True:
            await asyncio.sleep(max(0.0, next_at - loop.time()))
            self._run_once()
            next_at += self.interval

            # Skip missed slots instead of bursting to catch up
            now = loop.time()
            if next_at < now:
                missed = int((now - next_at) // self.interval) + 1
                next_at += missed * self.interval

    def _run_once(self) -> None:
        self._tick_count += 1
        try:
            self.callback()
        except Exception as e:
            self._error_count += 1
            logger.error(f"{self.name}: Error in tick: {e}", exc_info=True)

    def get_stats(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "running": self.is_running,
            "ticks": self._tick_count,
            "errors": self._error_count,
            "interval": self.interval,
        }
