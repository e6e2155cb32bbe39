"""
JSON Parser utility for extracting JSON from LLM responses.
"""
import json
import logging
import re
from typing import Any, Dict

from civic_ai.services.classification.errors import ParseError

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"```json\n?|\n?```")


class JSONParser:
    """Helper class to extract a JSON object from model output."""

    @staticmethod
    def strip_code_fences(text: str) -> str:
        """Remove Markdown code fences (with an optional json tag)."""
        return _CODE_FENCE.sub("", text).strip()

    @staticmethod
    def greedy_span(text: str) -> str | None:
        """Return the substring from the first '{' to the last '}'."""
        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end < start:
            return None
        return text[start : end + 1]

    @staticmethod
    def first_balanced_object(text: str) -> Dict[str, Any] | None:
        """Decode the first complete JSON object found in text."""
        decoder = json.JSONDecoder()
        index = text.find("{")
        while index != -1:
            try:
                value, _ = decoder.raw_decode(text, index)
            except json.JSONDecodeError:
                index = text.find("{", index + 1)
                continue
            if isinstance(value, dict):
                return value
            index = text.find("{", index + 1)
        return None

    @classmethod
    def extract_json(cls, text: str) -> Dict[str, Any]:
        """Extract the JSON object embedded in a model answer.

        The greedy first-brace-to-last-brace span is tried first; when it is
        not valid JSON (e.g. the answer contains several fragments) the first
        balanced object is used instead.

        Raises:
            ParseError: No JSON object could be found or decoded.
        """
        cleaned = cls.strip_code_fences(text or "")
        span = cls.greedy_span(cleaned)
        if span is None:
            raise ParseError("Invalid response format: no JSON object in model output")

        try:
            value = json.loads(span)
        except json.JSONDecodeError as e:
            value = cls.first_balanced_object(span)
            if value is None:
                logger.warning("JSONParser: malformed JSON in model output: %s", span[:500])
                raise ParseError(f"Invalid response format: {e}") from e
            logger.debug("JSONParser: greedy span invalid, used first balanced object")

        if not isinstance(value, dict):
            raise ParseError("Invalid response format: JSON payload is not an object")
        return value
