"""Civic issue classifier service."""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

from civic_ai.config.constants import (
    CONNECTION_ACK_PHRASE,
    FAILURE_MESSAGES,
    GENERIC_IMAGE_FAILURE,
    GENERIC_TEXT_FAILURE,
    IMAGE_RETRY_MESSAGE,
    TEXT_RETRY_MESSAGE,
    FailureKind,
    IssueCategory,
    PayloadKind,
    Urgency,
)
from civic_ai.config.prompts import (
    CONNECTION_TEST_PROMPT,
    build_image_classification_prompt,
    build_text_classification_prompt,
)
from civic_ai.config.settings import Settings
from civic_ai.infrastructure.llm.factory import create_transport_selector
from civic_ai.infrastructure.llm.rate_limiter import RateLimiter, get_shared_rate_limiter
from civic_ai.infrastructure.llm.selector import TransportSelector
from civic_ai.infrastructure.llm.transports import ModelRequest
from civic_ai.infrastructure.logging.logger import StructuredLogger
from civic_ai.services.classification.errors import ParseError
from civic_ai.services.classification.interpreter import ResponseInterpreter
from civic_ai.services.classification.models import (
    ClassificationRequest,
    ClassificationResult,
)
from civic_ai.utils.retry import retry_with_backoff

logger = logging.getLogger(__name__)

OnProgress = Callable[[str, int | None, int | None], None]


def classify_failure(error: BaseException) -> FailureKind:
    """Pick the user-facing failure class for an error."""
    if isinstance(error, ParseError):
        return FailureKind.PARSE
    message = str(error)
    lowered = message.lower()
    if "503" in message or "overloaded" in lowered:
        return FailureKind.BUSY
    if "429" in message or "quota exceeded" in lowered:
        return FailureKind.RATE_LIMITED
    if "network" in lowered or "fetch" in lowered:
        return FailureKind.NETWORK
    return FailureKind.GENERIC


def describe_failure(kind: FailureKind, payload_kind: PayloadKind) -> str:
    """Human-readable explanation for a fallback result."""
    generic = GENERIC_IMAGE_FAILURE if payload_kind is PayloadKind.IMAGE else GENERIC_TEXT_FAILURE
    return FAILURE_MESSAGES.get(kind, generic)


class CivicIssueClassifier:
    """Classifies civic issue photos and descriptions.

    Fail-soft: classify_image and classify_text never raise; on any failure
    they return a fallback result tagged with ``is_fallback``.
    """

    def __init__(
        self,
        settings: Settings,
        selector: TransportSelector | None = None,
        rate_limiter: RateLimiter | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize classifier; transports and limiter default to the shared ones."""
        self.settings = settings
        self.selector = selector or create_transport_selector(settings)
        self.rate_limiter = rate_limiter or get_shared_rate_limiter(settings.rate_limit_interval_ms)
        self.interpreter = ResponseInterpreter()
        self._sleep = sleep
        self._events = StructuredLogger(__name__)

    async def _query_model(
        self,
        model_request: ModelRequest,
        on_retry: Callable[[int, int], None] | None = None,
    ) -> str:
        return await retry_with_backoff(
            lambda: self.selector.send(model_request),
            max_attempts=self.settings.retry_max_attempts,
            base_delay_ms=self.settings.retry_base_delay_ms,
            on_retry=on_retry,
            rate_limiter=self.rate_limiter,
            sleep=self._sleep,
        )

    @staticmethod
    def _progress_reporter(
        template: str, on_progress: OnProgress | None
    ) -> Callable[[int, int], None] | None:
        if on_progress is None:
            return None

        def report(attempt: int, max_attempts: int) -> None:
            on_progress(
                template.format(attempt=attempt, max_attempts=max_attempts),
                attempt,
                max_attempts,
            )

        return report

    async def classify(
        self,
        request: ClassificationRequest,
        on_progress: OnProgress | None = None,
    ) -> ClassificationResult:
        """
        Classify an image or text request.

        Args:
            request: Image or text payload
            on_progress: Optional observer called before each retry

        Returns:
            ClassificationResult, a fallback one if the model could not be used
        """
        is_image = request.payload_kind is PayloadKind.IMAGE
        step = "classify_image" if is_image else "classify_text"
        start = time.monotonic()

        if is_image:
            model_request = ModelRequest(
                prompt=build_image_classification_prompt(),
                image_base64=request.image_data,
            )
            template = IMAGE_RETRY_MESSAGE
        else:
            model_request = ModelRequest(prompt=build_text_classification_prompt(request.text))
            template = TEXT_RETRY_MESSAGE

        try:
            text = await self._query_model(
                model_request, self._progress_reporter(template, on_progress)
            )
            logger.debug("Gemini %s response: %s", request.payload_kind.value, text)
            if is_image:
                result = self.interpreter.interpret(text, include_confidence=True)
            else:
                result = self.interpreter.interpret(
                    text, include_confidence=False, default_description=request.text
                )
        except Exception as e:
            self._events.log_error(step, e, {"payload_kind": request.payload_kind.value})
            result = self._fallback(request, e)

        self._events.log_step(
            step,
            {
                "category": result.category,
                "mapped_category": result.mapped_category.value,
                "confidence": result.confidence,
                "is_fallback": result.is_fallback,
                "failure_kind": result.failure_kind.value if result.failure_kind else None,
            },
            duration_ms=(time.monotonic() - start) * 1000,
        )
        return result

    def _fallback(self, request: ClassificationRequest, error: Exception) -> ClassificationResult:
        kind = classify_failure(error)
        message = describe_failure(kind, request.payload_kind)
        if request.payload_kind is PayloadKind.IMAGE:
            description = message
            confidence = 0
        else:
            description = request.text if request.text and request.text.strip() else message
            confidence = None
        return ClassificationResult(
            category="Other",
            mapped_category=IssueCategory.OTHERS,
            description=description,
            urgency=Urgency.MEDIUM,
            confidence=confidence,
            is_fallback=True,
            failure_kind=kind,
            failure_message=message,
        )

    async def classify_image(
        self,
        image_base64: str,
        on_progress: OnProgress | None = None,
    ) -> ClassificationResult:
        """Classify an issue photo given as base64 (no data-URI prefix)."""
        return await self.classify(ClassificationRequest.for_image(image_base64), on_progress)

    async def classify_text(
        self,
        text: str,
        on_progress: OnProgress | None = None,
    ) -> ClassificationResult:
        """Classify a free-text issue description."""
        return await self.classify(ClassificationRequest.for_text(text), on_progress)

    async def test_connection(self) -> bool:
        """Liveness probe: ask the model to acknowledge a fixed prompt."""
        try:
            text = await self._query_model(ModelRequest(prompt=CONNECTION_TEST_PROMPT))
        except Exception as e:
            kind = classify_failure(e)
            logger.error(
                "Gemini connection test failed (%s): %s", kind.value, e, exc_info=True
            )
            return False
        logger.info("Gemini test response: %s", text)
        return CONNECTION_ACK_PHRASE in text.lower()
