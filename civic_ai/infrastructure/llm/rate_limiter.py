"""Process-wide spacing between outgoing model requests."""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

DEFAULT_MIN_INTERVAL_MS = 2000


class RateLimiter:
    """Enforce a minimum interval between permitted calls.

    The read-modify-write of the last-call timestamp happens under an
    ``asyncio.Lock``, so concurrent callers queue up and are released one
    interval apart instead of computing the same wait.
    """

    def __init__(
        self,
        min_interval_ms: int = DEFAULT_MIN_INTERVAL_MS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._min_interval = min_interval_ms / 1000
        self._clock = clock
        self._sleep = sleep
        self._last_call: float | None = None
        self._lock = asyncio.Lock()

    @property
    def min_interval_ms(self) -> int:
        return int(self._min_interval * 1000)

    async def throttle(self) -> None:
        """Wait until the minimum interval has elapsed, then claim the slot."""
        async with self._lock:
            if self._last_call is not None:
                elapsed = self._clock() - self._last_call
                if elapsed < self._min_interval:
                    wait = self._min_interval - elapsed
                    logger.info("Rate limiting: waiting %.0fms", wait * 1000)
                    await self._sleep(wait)
            self._last_call = self._clock()


_shared_rate_limiter: RateLimiter | None = None


def get_shared_rate_limiter(min_interval_ms: int = DEFAULT_MIN_INTERVAL_MS) -> RateLimiter:
    """
    Get or create the process-wide rate limiter.

    All classification calls share one spacing budget. The interval is fixed
    by the first caller.
    """
    global _shared_rate_limiter
    if _shared_rate_limiter is None:
        _shared_rate_limiter = RateLimiter(min_interval_ms)
    return _shared_rate_limiter


def reset_shared_rate_limiter() -> None:
    """Drop the shared rate limiter so the next call creates a fresh one."""
    global _shared_rate_limiter
    _shared_rate_limiter = None
