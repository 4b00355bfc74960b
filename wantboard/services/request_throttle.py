"""
Request Throttle: FIFO spacing for outbound catalog calls.

Scryfall asks clients to stay around 10 requests/second. Every external
call is dispatched through one RequestThrottle shared by the process.

INVARIANTS:
- Dispatches are spaced at least `min_interval` seconds apart
- Callers are dispatched strictly in arrival order (asyncio.Lock is FIFO)
- Nothing is batched, reordered or retried
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MIN_INTERVAL_SECONDS = 0.1


class RequestThrottle:
    """
    FIFO scheduler enforcing a minimum spacing between dispatched calls.

    The clock and sleep functions are injectable so tests can drive the
    throttle with a fake clock.
    """

    def __init__(
        self,
        min_interval: float = DEFAULT_MIN_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._min_interval = max(min_interval, 0.0)
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._last_dispatch: float | None = None
        self._dispatch_count = 0

    @property
    def dispatch_count(self) -> int:
        """Number of calls dispatched so far."""
        return self._dispatch_count

    async def enqueue(self, task: Callable[[], Awaitable[T]]) -> T:
        """
        Wait for this caller's turn, then run the task.

        The turn is held only until the call is dispatched; the call itself
        runs outside the queue so a slow response does not stretch the
        spacing for everyone behind it.

        Args:
            task: Zero-argument coroutine function performing the call

        Returns:
            Whatever the task returns. Task exceptions propagate unchanged.
        """
        async with self._lock:
            if self._last_dispatch is not None:
                wait = self._last_dispatch + self._min_interval - self._clock()
                if wait > 0:
                    logger.debug("THROTTLE_WAIT", extra={"wait_seconds": round(wait, 4)})
                    await self._sleep(wait)
            self._last_dispatch = self._clock()
            self._dispatch_count += 1

        return await task()
