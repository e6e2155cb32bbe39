"""
Retry utilities for handling rate limits and transient errors.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from civic_ai.config.constants import RETRYABLE_ERROR_MARKERS
from civic_ai.infrastructure.llm.rate_limiter import RateLimiter, get_shared_rate_limiter

logger = logging.getLogger(__name__)

T = TypeVar("T")

OnRetry = Callable[[int, int], None]


def is_retryable_error(exception: BaseException) -> bool:
    """Check if an error is transient and worth retrying.

    Matches the lower-cased message against RETRYABLE_ERROR_MARKERS
    (overload, rate limit, quota and network failures). Everything else,
    including ParseError and authentication failures, is permanent.
    """
    message = str(exception).lower()
    return any(marker in message for marker in RETRYABLE_ERROR_MARKERS)


@dataclass
class RetryAttempt:
    """Ephemeral state of one retry loop."""

    attempt_number: int
    max_attempts: int
    last_error: BaseException | None = None
    retryable: bool = False
    next_delay_ms: int | None = None


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    base_delay_ms: int = 1000,
    on_retry: OnRetry | None = None,
    *,
    rate_limiter: RateLimiter | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    is_retryable: Callable[[BaseException], bool] = is_retryable_error,
) -> T:
    """
    Execute an async operation with rate limiting and exponential backoff.

    Args:
        operation: Async function to execute (no parameters)
        max_attempts: Total number of attempts, including the first one
        base_delay_ms: Delay before the second attempt; doubles afterwards
        on_retry: Called with (attempt, max_attempts) before every attempt but the first
        rate_limiter: Limiter consulted before every attempt (shared one by default)
        sleep: Awaitable sleep in seconds, injectable for tests
        is_retryable: Policy deciding whether a failure is transient

    Returns:
        Result from the operation

    Raises:
        Exception: The last error once attempts are exhausted, or the first
            non-retryable error
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

    limiter = rate_limiter or get_shared_rate_limiter()
    state = RetryAttempt(attempt_number=1, max_attempts=max_attempts)

    for attempt in range(1, max_attempts + 1):
        state.attempt_number = attempt
        state.next_delay_ms = None
        await limiter.throttle()

        logger.debug("Attempt %s/%s", attempt, max_attempts)
        if on_retry is not None and attempt > 1:
            on_retry(attempt, max_attempts)

        try:
            return await operation()
        except Exception as e:
            state.last_error = e
            state.retryable = is_retryable(e)

            if not state.retryable or attempt == max_attempts:
                logger.error(
                    "Attempt %s/%s failed (%s): %s",
                    attempt,
                    max_attempts,
                    "retries exhausted" if state.retryable else "not retryable",
                    e,
                )
                raise

            state.next_delay_ms = base_delay_ms * 2 ** (attempt - 1)
            logger.warning(
                "Transient error detected (%s). Attempt %s/%s. Waiting %sms before retry...",
                e,
                attempt,
                max_attempts,
                state.next_delay_ms,
            )
            await sleep(state.next_delay_ms / 1000)

    raise RuntimeError("Max attempts exceeded")
