from __future__ import annotations

import asyncio

import pytest

from optionpulse.application.services.trading_loop import TradingLoop


class CountingCycle:
    def __init__(self, failures: int = 0):
        self.cycles = 0
        self.failures = failures
        self.ran = asyncio.Event()

    async def execute(self):
        self.cycles += 1
        self.ran.set()
        if self.cycles <= self.failures:
            raise RuntimeError("boom")


async def wait_until(predicate, timeout=2.0):
    async def _poll():
        while not predicate():
            await asyncio.sleep(0.005)
    await asyncio.wait_for(_poll(), timeout)


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        TradingLoop(CountingCycle(), interval_seconds=0)


@pytest.mark.asyncio
async def test_runs_periodically_until_stopped():
    cycle = CountingCycle()
    loop = TradingLoop(cycle, interval_seconds=0.01)

    task = asyncio.create_task(loop.start())
    await wait_until(lambda: cycle.cycles >= 3)
    assert loop.is_running

    await loop.stop()
    await asyncio.wait_for(task, 1.0)
    assert not loop.is_running


@pytest.mark.asyncio
async def test_cycle_errors_do_not_stop_loop():
    cycle = CountingCycle(failures=2)
    loop = TradingLoop(cycle, interval_seconds=0.01)

    task = asyncio.create_task(loop.start())
    await wait_until(lambda: cycle.cycles >= 4)
    await loop.stop()
    await asyncio.wait_for(task, 1.0)

    assert loop.errors == 2
    assert loop.to_dict()["errors"] == 2


@pytest.mark.asyncio
async def test_stop_wakes_sleeping_loop():
    cycle = CountingCycle()
    loop = TradingLoop(cycle, interval_seconds=60)

    task = asyncio.create_task(loop.start())
    await asyncio.wait_for(cycle.ran.wait(), 1.0)
    await loop.stop()

    await asyncio.wait_for(task, 1.0)
    assert cycle.cycles == 1
