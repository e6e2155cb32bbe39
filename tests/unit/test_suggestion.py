"""Tests for report form suggestions."""

from civic_ai.config.constants import FailureKind, IssueCategory, Priority, Urgency
from civic_ai.services.classification.models import ClassificationResult
from civic_ai.services.classification.suggestion import build_form_suggestion


def _result(**overrides) -> ClassificationResult:
    defaults = dict(
        category="Pothole",
        mapped_category=IssueCategory.ROADS,
        description="Deep pothole",
        urgency=Urgency.HIGH,
        confidence=77,
    )
    defaults.update(overrides)
    return ClassificationResult(**defaults)


def test_confident_image_result_auto_fills():
    suggestion = build_form_suggestion(_result())
    assert suggestion.auto_fill is True
    assert suggestion.title == "Issue: Roads"
    assert suggestion.priority is Priority.HIGH
    assert suggestion.category is IssueCategory.ROADS
    assert "Pothole → Roads" in suggestion.message


def test_low_confidence_requires_manual_entry():
    suggestion = build_form_suggestion(_result(confidence=30))
    assert suggestion.auto_fill is False
    assert "confidence: 30%" in suggestion.message


def test_custom_threshold():
    assert build_form_suggestion(_result(confidence=30), low_confidence_threshold=10).auto_fill


def test_text_result_auto_fills():
    suggestion = build_form_suggestion(_result(confidence=None, urgency=Urgency.LOW))
    assert suggestion.auto_fill is True
    assert suggestion.priority is Priority.LOW


def test_fallback_never_auto_fills():
    result = _result(
        category="Other",
        mapped_category=IssueCategory.OTHERS,
        urgency=Urgency.MEDIUM,
        confidence=0,
        is_fallback=True,
        failure_kind=FailureKind.BUSY,
        failure_message="AI service is currently busy.",
    )
    suggestion = build_form_suggestion(result)
    assert suggestion.auto_fill is False
    assert suggestion.title == "Issue: Others"
    assert suggestion.message.startswith("AI service is currently busy.")
