"""Tests for the response interpreter."""

import pytest

from civic_ai.config.constants import IssueCategory, Urgency
from civic_ai.services.classification.errors import ParseError
from civic_ai.services.classification.interpreter import (
    ResponseInterpreter,
    clamp_confidence,
    normalize_urgency,
)


@pytest.fixture
def interpreter():
    return ResponseInterpreter()


def test_interpret_fenced_answer(interpreter):
    text = (
        "Here you go:\n```json\n"
        '{"category":"Pothole","description":"x","urgency":"high","confidence":77}\n```'
    )
    result = interpreter.interpret(text, include_confidence=True)
    assert result.category == "Pothole"
    assert result.mapped_category is IssueCategory.ROADS
    assert result.description == "x"
    assert result.urgency is Urgency.HIGH
    assert result.confidence == 77
    assert result.is_fallback is False


def test_interpret_applies_defaults(interpreter):
    result = interpreter.interpret("{}", include_confidence=True)
    assert result.category == "Other"
    assert result.mapped_category is IssueCategory.OTHERS
    assert result.description == "Unable to analyze image"
    assert result.urgency is Urgency.MEDIUM
    assert result.confidence == 0


def test_interpret_text_omits_confidence(interpreter):
    text = '{"category": "Garbage", "urgency": "LOW", "confidence": 90}'
    result = interpreter.interpret(
        text, include_confidence=False, default_description="bins overflowing"
    )
    assert result.confidence is None
    assert result.description == "bins overflowing"
    assert result.urgency is Urgency.LOW
    assert result.mapped_category is IssueCategory.SANITATION


def test_interpret_without_json_raises(interpreter):
    with pytest.raises(ParseError):
        interpreter.interpret("I cannot help with that.", include_confidence=True)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (77, 77),
        (150, 100),
        (-5, 0),
        (42.6, 43),
        (float("inf"), 100),
        (float("nan"), 0),
        ("80", 0),
        (None, 0),
        (True, 0),
        ([50], 0),
    ],
)
def test_clamp_confidence(raw, expected):
    assert clamp_confidence(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("high", Urgency.HIGH),
        (" Medium ", Urgency.MEDIUM),
        ("LOW", Urgency.LOW),
        ("critical", Urgency.MEDIUM),
        (3, Urgency.MEDIUM),
        (None, Urgency.MEDIUM),
    ],
)
def test_normalize_urgency(raw, expected):
    assert normalize_urgency(raw) is expected
