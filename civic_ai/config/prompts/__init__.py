"""Prompts for the civic issue classifier."""

from civic_ai.config.prompts.classification import (
    CONNECTION_TEST_PROMPT,
    MODEL_CATEGORY_CHOICES,
    build_image_classification_prompt,
    build_text_classification_prompt,
)

__all__ = [
    "CONNECTION_TEST_PROMPT",
    "MODEL_CATEGORY_CHOICES",
    "build_image_classification_prompt",
    "build_text_classification_prompt",
]
