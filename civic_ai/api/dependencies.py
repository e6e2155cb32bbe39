"""FastAPI dependencies."""

from fastapi import Depends

from civic_ai.config.settings import Settings, get_settings
from civic_ai.services.classification.classifier import CivicIssueClassifier

_classifier: CivicIssueClassifier | None = None


def get_classifier(settings: Settings = Depends(get_settings)) -> CivicIssueClassifier:
    """Get the shared classifier as a FastAPI dependency."""
    global _classifier
    if _classifier is None:
        _classifier = CivicIssueClassifier(settings)
    return _classifier


def reset_classifier() -> None:
    """Forget the shared classifier (used on shutdown)."""
    global _classifier
    _classifier = None
