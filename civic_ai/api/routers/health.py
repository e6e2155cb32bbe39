"""Health endpoints."""

from fastapi import APIRouter, Depends

from civic_ai.api.dependencies import get_classifier
from civic_ai.api.models import AIHealthResponse, HealthResponse
from civic_ai.config.settings import Settings, get_settings
from civic_ai.services.classification.classifier import CivicIssueClassifier

router = APIRouter()


@router.get("", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=settings.app_version)


@router.get("/ai", response_model=AIHealthResponse)
async def ai_health(
    classifier: CivicIssueClassifier = Depends(get_classifier),
) -> AIHealthResponse:
    """Check that the model answers the connection test prompt."""
    return AIHealthResponse(available=await classifier.test_connection())
