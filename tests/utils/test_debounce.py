"""
Tests for the asyncio debouncer.
"""

import asyncio
from unittest.mock import AsyncMock

from city_weather.utils.debounce import Debouncer


class TestDebouncer:
    """Test cases for Debouncer timing and cancellation."""

    async def test_fires_once_with_latest_arguments(self):
        callback = AsyncMock()
        debouncer = Debouncer(0.01, callback)

        debouncer.trigger("a")
        debouncer.trigger("ab")
        debouncer.trigger("abc")
        await debouncer.wait()

        callback.assert_awaited_once_with("abc")

    async def test_does_not_fire_before_delay(self):
        callback = AsyncMock()
        debouncer = Debouncer(10, callback)

        debouncer.trigger("x")
        await asyncio.sleep(0)

        assert debouncer.pending is True
        callback.assert_not_awaited()
        debouncer.cancel()

    async def test_cancel_prevents_firing(self):
        callback = AsyncMock()
        debouncer = Debouncer(0.01, callback)

        debouncer.trigger("x")
        debouncer.cancel()
        await asyncio.sleep(0.03)

        assert debouncer.pending is False
        callback.assert_not_awaited()

    async def test_retrigger_does_not_cancel_running_callback(self):
        started = asyncio.Event()
        release = asyncio.Event()
        calls = []

        async def callback(value):
            calls.append(value)
            started.set()
            await release.wait()

        debouncer = Debouncer(0.01, callback)
        debouncer.trigger("first")
        await started.wait()

        debouncer.trigger("second")
        release.set()
        await debouncer.wait()

        assert calls == ["first", "second"]

    async def test_callback_error_is_contained(self):
        callback = AsyncMock(side_effect=RuntimeError("boom"))
        debouncer = Debouncer(0.01, callback)

        debouncer.trigger()
        await debouncer.wait()

        callback.assert_awaited_once()

    async def test_wait_without_trigger(self):
        await Debouncer(0.01, AsyncMock()).wait()
