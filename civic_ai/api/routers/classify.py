"""Classification endpoints."""

import logging

from fastapi import APIRouter, Depends

from civic_ai.api.dependencies import get_classifier
from civic_ai.api.models import (
    ClassificationResponse,
    ImageClassificationRequest,
    TextClassificationRequest,
)
from civic_ai.config.settings import Settings, get_settings
from civic_ai.services.classification.classifier import CivicIssueClassifier
from civic_ai.services.classification.models import ClassificationResult
from civic_ai.services.classification.suggestion import build_form_suggestion

logger = logging.getLogger(__name__)

router = APIRouter()


def _respond(
    result: ClassificationResult, progress: list[str], settings: Settings
) -> ClassificationResponse:
    return ClassificationResponse(
        result=result,
        suggestion=build_form_suggestion(result, settings.low_confidence_threshold),
        progress=progress,
    )


@router.post("/image", response_model=ClassificationResponse)
async def classify_image(
    request: ImageClassificationRequest,
    classifier: CivicIssueClassifier = Depends(get_classifier),
    settings: Settings = Depends(get_settings),
) -> ClassificationResponse:
    """Classify an issue photo and suggest report form values."""
    progress: list[str] = []
    result = await classifier.classify_image(
        request.image_base64,
        on_progress=lambda message, attempt, max_attempts: progress.append(message),
    )
    return _respond(result, progress, settings)


@router.post("/text", response_model=ClassificationResponse)
async def classify_text(
    request: TextClassificationRequest,
    classifier: CivicIssueClassifier = Depends(get_classifier),
    settings: Settings = Depends(get_settings),
) -> ClassificationResponse:
    """Classify a free-text issue description."""
    progress: list[str] = []
    result = await classifier.classify_text(
        request.text,
        on_progress=lambda message, attempt, max_attempts: progress.append(message),
    )
    return _respond(result, progress, settings)
