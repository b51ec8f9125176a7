"""Tests for the single-slot debouncer."""

import asyncio

from services.debounce import Debouncer


class Recorder:
    def __init__(self, delay: float = 0.0):
        self.calls = []
        self.delay = delay

    async def __call__(self, value):
        await asyncio.sleep(self.delay)
        self.calls.append(value)


def test_burst_produces_one_call_with_final_value():
    async def scenario():
        recorder = Recorder()
        debouncer = Debouncer(delay=0.1)
        for text in ["J", "Jo", "Joh", "John", "John S"]:
            debouncer.schedule(recorder, text)
            await asyncio.sleep(0.01)
        await debouncer.drain()
        return recorder.calls

    assert asyncio.run(scenario()) == ["John S"]


def test_cancel_prevents_call():
    async def scenario():
        recorder = Recorder()
        debouncer = Debouncer(delay=0.05)
        debouncer.schedule(recorder, "gone")
        assert debouncer.pending
        debouncer.cancel()
        assert not debouncer.pending
        await asyncio.sleep(0.1)
        return recorder.calls

    assert asyncio.run(scenario()) == []


def test_quiet_period_lets_each_call_through():
    async def scenario():
        recorder = Recorder()
        debouncer = Debouncer(delay=0.02)
        debouncer.schedule(recorder, "first")
        await asyncio.sleep(0.08)
        debouncer.schedule(recorder, "second")
        await debouncer.drain()
        return recorder.calls

    assert asyncio.run(scenario()) == ["first", "second"]


def test_fired_call_is_not_cancelled_by_new_schedule():
    async def scenario():
        slow = Recorder(delay=0.1)
        debouncer = Debouncer(delay=0.01)
        debouncer.schedule(slow, "in flight")
        await asyncio.sleep(0.03)  # timer fired, call still running
        debouncer.schedule(slow, "next")
        debouncer.cancel()
        await debouncer.drain()
        return slow.calls

    assert asyncio.run(scenario()) == ["in flight"]
