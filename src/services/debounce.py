"""
Single-slot debounced task for search-as-you-type.
"""

import asyncio
from collections.abc import Awaitable, Callable

from core.config import SEARCH_DEBOUNCE_SECONDS


class Debouncer:
    """
    Delay a coroutine call until input has been quiet for `delay` seconds.

    Holds at most one pending timer. Scheduling again cancels the pending
    timer first, so a superseded call is never issued. Once the timer fires
    the call runs detached and is not cancelled by later scheduling.
    """

    def __init__(self, delay: float = SEARCH_DEBOUNCE_SECONDS):
        self.delay = delay
        self._timer: asyncio.Task | None = None
        self._in_flight: set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def schedule(self, func: Callable[..., Awaitable], *args) -> None:
        """Cancel any pending call and arm a new one (needs a running loop)."""
        self.cancel()
        self._timer = asyncio.get_running_loop().create_task(self._fire(func, args))

    def cancel(self) -> None:
        if self.pending:
            self._timer.cancel()
        self._timer = None

    async def _fire(self, func: Callable[..., Awaitable], args: tuple) -> None:
        await asyncio.sleep(self.delay)
        self._timer = None
        call = asyncio.ensure_future(func(*args))
        self._in_flight.add(call)
        call.add_done_callback(self._in_flight.discard)

    async def drain(self) -> None:
        """Wait until no timer is pending and every fired call has finished."""
        while self._timer is not None or self._in_flight:
            tasks = [task for task in [self._timer, *self._in_flight] if task is not None]
            await asyncio.gather(*tasks, return_exceptions=True)
            if self._timer is not None and self._timer.done():
                self._timer = None
