"""
Single-slot cancelable deferred call for asyncio.

A DebouncedCall holds at most one pending invocation: the value it will be called with
and the loop time at which it fires. Scheduling again replaces both, cancelling the
previous wait, so a burst of schedule() calls results in a single invocation once the
burst has been quiet for the configured delay.
"""

import asyncio
from typing import Any, Awaitable, Callable, Optional, Union

from pdfsearch.app.utils.logging.logger import log_debug


class DebouncedCall:
    """
    Deferred call with a single pending slot.

    Attributes:
        delay (float): Seconds of inactivity before the callback runs.
        pending_value (Any): Value the pending call will receive, None when idle.
        deadline (Optional[float]): Loop time of the pending call, None when idle.
    """

    def __init__(
        self,
        callback: Callable[[Any], Union[None, Awaitable[None]]],
        delay: float,
        name: str = "debounced_call",
    ):
        self._callback = callback
        self.delay = delay
        self.name = name
        self.pending_value: Any = None
        self.deadline: Optional[float] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def is_pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def schedule(self, value: Any) -> None:
        """
        Replace any pending call with a call for value after the delay.

        Must be called from within the running event loop.
        """
        self.cancel()
        loop = asyncio.get_running_loop()
        self.pending_value = value
        self.deadline = loop.time() + self.delay
        self._task = loop.create_task(self._fire_later(value), name=self.name)
        log_debug(f"[OK] {self.name} armed for {self.delay:.3f}s")

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self.pending_value = None
        self.deadline = None

    async def wait(self) -> None:
        """Wait until the pending call, if any, has run or been cancelled."""
        task = self._task
        if task is None:
            return
        try:
            await asyncio.shield(task)
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    async def _fire_later(self, value: Any) -> None:
        await asyncio.sleep(self.delay)
        # The slot is released before the callback so it may schedule again.
        self._task = None
        self.pending_value = None
        self.deadline = None
        result = self._callback(value)
        if asyncio.iscoroutine(result):
            await result
