"""
Debouncing for asyncio callbacks.
"""

import asyncio
from contextlib import suppress
from typing import Any, Awaitable, Callable, Optional

from city_weather.utils.logger import setup_logger

logger = setup_logger(__name__)


class Debouncer:
    """
    Runs an async callback once input has been quiet for ``delay`` seconds.

    Every trigger() cancels the pending timer, if any, and arms a new one with
    the latest arguments. A callback that has already started is left to
    finish. Must be triggered from inside a running event loop.
    """

    def __init__(self, delay: float, callback: Callable[..., Awaitable[Any]]):
        self.delay = delay
        self.callback = callback
        self._task: Optional[asyncio.Task] = None
        self._fired: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def trigger(self, *args: Any, **kwargs: Any) -> None:
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._fire(args, kwargs))

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def wait(self) -> None:
        """
        Wait for the armed timer and any running callback to finish.
        """
        for task in (self._task, self._fired):
            if task is not None and not task.done():
                with suppress(asyncio.CancelledError):
                    await task

    async def _fire(self, args: tuple, kwargs: dict) -> None:
        await asyncio.sleep(self.delay)

        current = asyncio.current_task()
        self._fired = current
        if self._task is current:
            self._task = None

        try:
            await self.callback(*args, **kwargs)
        except Exception as e:
            logger.error(
                "Debounced callback failed",
                extra={
                    "event": "debounce_callback_error",
                    "callback": getattr(self.callback, "__name__", repr(self.callback)),
                    "error": str(e),
                    "error_type": type(e).__name__,
                },
            )
