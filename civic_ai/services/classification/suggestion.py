"""Report form pre-fill from a classification result."""

from civic_ai.config.constants import URGENCY_TO_PRIORITY
from civic_ai.services.classification.models import (
    ClassificationResult,
    IssueFormSuggestion,
)

DEFAULT_LOW_CONFIDENCE_THRESHOLD = 30


def build_form_suggestion(
    result: ClassificationResult,
    low_confidence_threshold: int = DEFAULT_LOW_CONFIDENCE_THRESHOLD,
) -> IssueFormSuggestion:
    """Derive report form values and decide whether to auto-fill them.

    Image results auto-fill only above the confidence threshold; text results
    carry no confidence and auto-fill unless they are fallbacks.
    """
    mapped = result.mapped_category.value

    if result.is_fallback:
        auto_fill = False
        message = f"{result.failure_message} Please fill in the details manually."
    elif result.confidence is None:
        auto_fill = True
        message = (
            f"Based on your description, AI suggests: {result.category} → {mapped}, "
            f"urgency {result.urgency.value}."
        )
    elif result.confidence > low_confidence_threshold:
        auto_fill = True
        message = f"Detected: {result.category} → {mapped} (confidence {result.confidence}%)"
    else:
        auto_fill = False
        message = (
            "The image doesn't appear to show a clear civic issue "
            f"(confidence: {result.confidence}%). Please fill in the details manually."
        )

    return IssueFormSuggestion(
        title=f"Issue: {mapped}",
        category=result.mapped_category,
        priority=URGENCY_TO_PRIORITY[result.urgency],
        description=result.description,
        confidence=result.confidence,
        auto_fill=auto_fill,
        message=message,
    )
