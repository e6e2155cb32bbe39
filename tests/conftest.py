"""Pytest configuration and fixtures."""

import pytest

from civic_ai.config.settings import Settings
from civic_ai.infrastructure.llm.rate_limiter import RateLimiter
from civic_ai.infrastructure.llm.selector import TransportSelector
from civic_ai.infrastructure.llm.transports import ModelRequest
from civic_ai.services.classification.classifier import CivicIssueClassifier


class FakeTransport:
    """Transport stub replaying a script of answers and exceptions.

    The last outcome repeats once the script is exhausted.
    """

    def __init__(self, name: str, *outcomes):
        self.name = name
        self.outcomes = list(outcomes)
        self.requests: list[ModelRequest] = []

    async def send(self, request: ModelRequest) -> str:
        self.requests.append(request)
        outcome = self.outcomes[0] if len(self.outcomes) == 1 else self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class SleepRecorder:
    """Awaitable sleep replacement that records requested delays."""

    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def settings():
    """Provide settings fixture."""
    return Settings(gemini_api_key="test-key", check_ai_on_startup=False)


@pytest.fixture
def fake_transport():
    """Provide the FakeTransport class."""
    return FakeTransport


@pytest.fixture
def sleep():
    """Provide a sleep recorder."""
    return SleepRecorder()


@pytest.fixture
def no_wait_limiter():
    """Rate limiter that never has to wait."""
    return RateLimiter(min_interval_ms=0)


@pytest.fixture
def make_classifier(settings, sleep, no_wait_limiter):
    """Build a classifier over primary/secondary fake transports."""

    def _make(primary: FakeTransport, secondary: FakeTransport) -> CivicIssueClassifier:
        return CivicIssueClassifier(
            settings,
            selector=TransportSelector([primary, secondary]),
            rate_limiter=no_wait_limiter,
            sleep=sleep,
        )

    return _make
