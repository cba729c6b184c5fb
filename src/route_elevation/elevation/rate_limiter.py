"""Minimum-spacing rate limiter for single-point providers."""

import asyncio
import time
from collections.abc import Awaitable, Callable


class RateLimiter:
    """Enforce a minimum delay between consecutive calls.

    The clock and sleep functions are injectable so spacing can be tested
    without real waits. The first call never waits.
    """

    def __init__(
        self,
        min_delay: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if min_delay < 0:
            raise ValueError(f"min_delay must be non-negative, got {min_delay}")
        self._min_delay = min_delay
        self._clock = clock
        self._sleep = sleep
        self._last_call: float | None = None

    @property
    def min_delay(self) -> float:
        return self._min_delay

    async def wait(self) -> None:
        """Suspend until min_delay has elapsed since the previous call."""
        if self._last_call is not None:
            remaining = self._min_delay - (self._clock() - self._last_call)
            if remaining > 0:
                await self._sleep(remaining)
        self._last_call = self._clock()
