"""
Unit tests for PeriodicTask.

Uses millisecond intervals; assertions leave generous slack for slow runners.
"""
import asyncio

import pytest

from iot_device_manager.simulation.scheduler import PeriodicTask


def test_rejects_non_positive_interval():
    with pytest.raises(ValueError):
        PeriodicTask(lambda: None, interval=0)


def test_not_running_before_start():
    task = PeriodicTask(lambda: None, interval=1.0)
    assert task.is_running is False
    assert task.tick_count == 0


class TestSchedule:
    @pytest.mark.asyncio
    async def test_ticks_repeatedly(self):
        calls = []
        task = PeriodicTask(lambda: calls.append(1), interval=0.02, initial_delay=0.0)

        task.start()
        await asyncio.sleep(0.15)
        await task.stop()

        assert len(calls) >= 3
        assert task.tick_count == len(calls)

    @pytest.mark.asyncio
    async def test_waits_for_initial_delay(self):
        calls = []
        task = PeriodicTask(lambda: calls.append(1), interval=0.02, initial_delay=0.5)

        task.start()
        await asyncio.sleep(0.05)
        await task.stop()

        assert calls == []

    @pytest.mark.asyncio
    async def test_start_twice_is_noop(self):
        task = PeriodicTask(lambda: None, interval=0.02)

        assert task.start() is True
        assert task.start() is False
        assert task.is_running

        await task.stop()

    @pytest.mark.asyncio
    async def test_errors_do_not_break_schedule(self):
        calls = []

        def flaky():
            calls.append(1)
            raise RuntimeError("bad tick")

        task = PeriodicTask(flaky, interval=0.02)
        task.start()
        await asyncio.sleep(0.12)
        await task.stop()

        assert len(calls) >= 2
        assert task.get_stats()["errors"] == len(calls)


class TestStop:
    @pytest.mark.asyncio
    async def test_no_ticks_after_stop(self):
        calls = []
        task = PeriodicTask(lambda: calls.append(1), interval=0.02)

        task.start()
        await asyncio.sleep(0.07)
        await task.stop()
        seen = len(calls)
        await asyncio.sleep(0.1)

        assert len(calls) == seen
        assert task.is_running is False

    @pytest.mark.asyncio
    async def test_stop_is_idempotent(self):
        task = PeriodicTask(lambda: None, interval=0.02)
        await task.stop()
        task.start()
        await task.stop()
        await task.stop()
        assert task.is_running is False

    @pytest.mark.asyncio
    async def test_restart_after_stop(self):
        calls = []
        task = PeriodicTask(lambda: calls.append(1), interval=0.02)

        task.start()
        await task.stop()
        task.start()
        await asyncio.sleep(0.06)
        await task.stop()

        assert calls

    @pytest.mark.asyncio
    async def test_stop_from_inside_callback(self):
        calls = []
        task = None

        def once():
            calls.append(1)
            asyncio.get_running_loop().create_task(task.stop())

        task = PeriodicTask(once, interval=0.02)
        task.start()
        await asyncio.sleep(0.12)

        assert calls == [1]
        assert task.is_running is False
