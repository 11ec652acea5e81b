"""
Tests for the schedulers.
"""

import asyncio

import pytest

from ..session import AsyncioScheduler, ManualScheduler


class TestManualScheduler:
    def test_call_later_runs_once(self):
        scheduler = ManualScheduler()
        calls = []
        scheduler.call_later(1.0, lambda: calls.append(scheduler.now))

        assert scheduler.advance(0.5) == 0
        assert scheduler.advance(1.0) == 1
        assert scheduler.advance(5.0) == 0
        assert calls == [1.0]

    def test_call_every_repeats(self):
        scheduler = ManualScheduler()
        calls = []
        scheduler.call_every(1.0, lambda: calls.append(scheduler.now))

        scheduler.advance(3.5)
        assert calls == [1.0, 2.0, 3.0]
        assert scheduler.now == 3.5

    def test_cancel(self):
        scheduler = ManualScheduler()
        calls = []
        task = scheduler.call_every(1.0, lambda: calls.append(1))

        scheduler.advance(1.0)
        task.cancel()
        task.cancel()
        scheduler.advance(5.0)

        assert calls == [1]
        assert task.cancelled
        assert scheduler.pending_count == 0

    def test_ties_run_in_scheduling_order(self):
        scheduler = ManualScheduler()
        order = []
        scheduler.call_later(1.0, lambda: order.append("first"))
        scheduler.call_later(1.0, lambda: order.append("second"))

        scheduler.advance(1.0)
        assert order == ["first", "second"]

    def test_callback_can_cancel_itself(self):
        scheduler = ManualScheduler()
        calls = []
        holder = {}

        def tick():
            calls.append(scheduler.now)
            if len(calls) == 2:
                holder["task"].cancel()

        holder["task"] = scheduler.call_every(1.0, tick)
        scheduler.advance(10)
        assert calls == [1.0, 2.0]

    def test_callback_scheduled_during_advance_runs_if_due(self):
        scheduler = ManualScheduler()
        calls = []
        scheduler.call_later(1.0, lambda: scheduler.call_later(0.5, lambda: calls.append(scheduler.now)))

        scheduler.advance(2.0)
        assert calls == [1.5]

    def test_rejects_bad_input(self):
        scheduler = ManualScheduler()
        with pytest.raises(ValueError):
            scheduler.advance(-1)
        with pytest.raises(ValueError):
            scheduler.call_every(0, lambda: None)


class TestAsyncioScheduler:
    def test_call_later_and_every(self):
        async def scenario():
            scheduler = AsyncioScheduler()
            fired = []
            scheduler.call_later(0.01, lambda: fired.append("once"))
            repeating = scheduler.call_every(0.01, lambda: fired.append("tick"))

            await asyncio.sleep(0.055)
            repeating.cancel()
            count = fired.count("tick")
            await asyncio.sleep(0.03)
            return fired, count, repeating

        fired, count, repeating = asyncio.run(scenario())

        assert fired.count("once") == 1
        assert count >= 2
        assert fired.count("tick") == count
        assert repeating.cancelled

    def test_cancelled_call_later_never_runs(self):
        async def scenario():
            scheduler = AsyncioScheduler()
            fired = []
            task = scheduler.call_later(0.01, lambda: fired.append(1))
            task.cancel()
            await asyncio.sleep(0.03)
            return fired, task

        fired, task = asyncio.run(scenario())
        assert fired == []
        assert task.cancelled
