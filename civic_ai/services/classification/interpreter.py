"""Turn raw model output into a ClassificationResult."""

import logging
import math
from typing import Any

from civic_ai.config.constants import (
    DEFAULT_IMAGE_DESCRIPTION,
    DEFAULT_MODEL_CATEGORY,
    Urgency,
)
from civic_ai.services.classification.category_mapper import map_category
from civic_ai.services.classification.models import ClassificationResult
from civic_ai.utils.json_parser import JSONParser

logger = logging.getLogger(__name__)


def normalize_urgency(value: Any) -> Urgency:
    """Case-insensitive urgency lookup; anything unknown is medium."""
    if isinstance(value, str):
        try:
            return Urgency(value.strip().lower())
        except ValueError:
            pass
    return Urgency.MEDIUM


def clamp_confidence(value: Any) -> int:
    """Round a numeric confidence into [0, 100]; non-numbers become 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if math.isnan(value):
        return 0
    if math.isinf(value):
        return 100 if value > 0 else 0
    return max(0, min(100, round(value)))


def _text_field(data: dict[str, Any], key: str, default: str) -> str:
    value = data.get(key)
    if isinstance(value, str) and value.strip():
        return value
    return default


class ResponseInterpreter:
    """Converts model answers into validated classification results."""

    def interpret(
        self,
        text: str,
        include_confidence: bool,
        default_description: str = DEFAULT_IMAGE_DESCRIPTION,
    ) -> ClassificationResult:
        """
        Parse a model answer.

        Args:
            text: Raw model output, possibly wrapped in prose or code fences
            include_confidence: Whether a confidence score is expected (image path)
            default_description: Used when the model gives no description

        Returns:
            ClassificationResult with mapped_category always set

        Raises:
            ParseError: The answer holds no parseable JSON object
        """
        data = JSONParser.extract_json(text)

        category = _text_field(data, "category", DEFAULT_MODEL_CATEGORY)
        result = ClassificationResult(
            category=category,
            mapped_category=map_category(category),
            description=_text_field(data, "description", default_description),
            urgency=normalize_urgency(data.get("urgency")),
            confidence=clamp_confidence(data.get("confidence")) if include_confidence else None,
        )
        logger.debug(
            "Interpreted model category %r as %s", category, result.mapped_category.value
        )
        return result
