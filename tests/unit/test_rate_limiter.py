"""Tests for the rate limiter."""

import asyncio

import pytest

from civic_ai.infrastructure.llm.rate_limiter import (
    RateLimiter,
    get_shared_rate_limiter,
    reset_shared_rate_limiter,
)


class FakeClock:
    """Manual clock whose sleep advances time."""

    def __init__(self, now: float = 100.0):
        self.now = now
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
        await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_first_call_does_not_wait():
    clock = FakeClock()
    limiter = RateLimiter(2000, clock=clock, sleep=clock.sleep)

    await limiter.throttle()

    assert clock.sleeps == []


@pytest.mark.asyncio
async def test_waits_remaining_interval():
    clock = FakeClock()
    limiter = RateLimiter(2000, clock=clock, sleep=clock.sleep)

    await limiter.throttle()
    clock.now += 0.5
    await limiter.throttle()

    assert clock.sleeps == [pytest.approx(1.5)]


@pytest.mark.asyncio
async def test_no_wait_after_interval_elapsed():
    clock = FakeClock()
    limiter = RateLimiter(2000, clock=clock, sleep=clock.sleep)

    await limiter.throttle()
    clock.now += 3.0
    await limiter.throttle()

    assert clock.sleeps == []


@pytest.mark.asyncio
async def test_concurrent_callers_are_spaced():
    clock = FakeClock()
    limiter = RateLimiter(2000, clock=clock, sleep=clock.sleep)
    released: list[float] = []

    async def call():
        await limiter.throttle()
        released.append(clock.now)

    await asyncio.gather(call(), call(), call())

    assert released == [pytest.approx(100.0), pytest.approx(102.0), pytest.approx(104.0)]


def test_shared_rate_limiter_is_a_singleton():
    reset_shared_rate_limiter()
    try:
        first = get_shared_rate_limiter(2000)
        assert get_shared_rate_limiter(500) is first
        assert first.min_interval_ms == 2000
    finally:
        reset_shared_rate_limiter()
