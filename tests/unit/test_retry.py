"""Tests for retry with backoff."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from civic_ai.utils.retry import is_retryable_error, retry_with_backoff


@pytest.mark.parametrize(
    "message",
    [
        "503 Service Unavailable",
        "The model is OVERLOADED",
        "Gemini REST text error 429: slow down",
        "Quota exceeded for project",
        "Network request failed",
        "Network error: connection reset",
        "TypeError: Failed to fetch",
    ],
)
def test_retryable_messages(message):
    assert is_retryable_error(Exception(message)) is True


@pytest.mark.parametrize("message", ["invalid api key", "400 bad request", "Invalid response format"])
def test_fatal_messages(message):
    assert is_retryable_error(Exception(message)) is False


@pytest.mark.asyncio
async def test_returns_first_success(no_wait_limiter, sleep):
    operation = AsyncMock(return_value="ok")
    on_retry = MagicMock()

    result = await retry_with_backoff(
        operation, 3, 1000, on_retry, rate_limiter=no_wait_limiter, sleep=sleep
    )

    assert result == "ok"
    assert operation.await_count == 1
    on_retry.assert_not_called()
    assert sleep.calls == []


@pytest.mark.asyncio
async def test_retryable_error_exhausts_attempts(no_wait_limiter, sleep):
    error = RuntimeError("503 overloaded")
    operation = AsyncMock(side_effect=error)
    on_retry = MagicMock()

    with pytest.raises(RuntimeError) as exc_info:
        await retry_with_backoff(
            operation, 4, 1000, on_retry, rate_limiter=no_wait_limiter, sleep=sleep
        )

    assert exc_info.value is error
    assert operation.await_count == 4
    assert on_retry.call_count == 3
    assert [c.args for c in on_retry.call_args_list] == [(2, 4), (3, 4), (4, 4)]


@pytest.mark.asyncio
async def test_backoff_doubles_between_attempts(no_wait_limiter, sleep):
    operation = AsyncMock(side_effect=RuntimeError("429 too many requests"))

    with pytest.raises(RuntimeError):
        await retry_with_backoff(
            operation, 4, 1000, rate_limiter=no_wait_limiter, sleep=sleep
        )

    # delays before attempts 2, 3, 4 in seconds
    assert sleep.calls == [1.0, 2.0, 4.0]


@pytest.mark.asyncio
async def test_fatal_error_short_circuits(no_wait_limiter, sleep):
    operation = AsyncMock(side_effect=ValueError("invalid api key"))
    on_retry = MagicMock()

    with pytest.raises(ValueError, match="invalid api key"):
        await retry_with_backoff(
            operation, 5, 1000, on_retry, rate_limiter=no_wait_limiter, sleep=sleep
        )

    assert operation.await_count == 1
    on_retry.assert_not_called()
    assert sleep.calls == []


@pytest.mark.asyncio
async def test_recovers_after_transient_failure(no_wait_limiter, sleep):
    operation = AsyncMock(side_effect=[RuntimeError("network error"), "answer"])

    result = await retry_with_backoff(
        operation, 3, 500, rate_limiter=no_wait_limiter, sleep=sleep
    )

    assert result == "answer"
    assert sleep.calls == [0.5]


@pytest.mark.asyncio
async def test_each_attempt_consumes_a_rate_limit_slot(sleep):
    limiter = MagicMock()
    limiter.throttle = AsyncMock()
    operation = AsyncMock(side_effect=RuntimeError("503"))

    with pytest.raises(RuntimeError):
        await retry_with_backoff(operation, 3, 10, rate_limiter=limiter, sleep=sleep)

    assert limiter.throttle.await_count == 3


@pytest.mark.asyncio
async def test_invalid_max_attempts(no_wait_limiter):
    with pytest.raises(ValueError):
        await retry_with_backoff(AsyncMock(), 0, rate_limiter=no_wait_limiter)


@pytest.mark.asyncio
async def test_custom_retry_policy(no_wait_limiter, sleep):
    operation = AsyncMock(side_effect=[KeyError("boom"), "ok"])

    result = await retry_with_backoff(
        operation,
        2,
        100,
        rate_limiter=no_wait_limiter,
        sleep=sleep,
        is_retryable=lambda e: isinstance(e, KeyError),
    )

    assert result == "ok"
