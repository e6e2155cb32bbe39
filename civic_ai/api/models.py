"""Request/Response models for API endpoints."""

from pydantic import BaseModel, Field

from civic_ai.services.classification.models import (
    ClassificationResult,
    IssueFormSuggestion,
)


class ImageClassificationRequest(BaseModel):
    """Request model for image classification."""

    image_base64: str = Field(..., min_length=1, description="Base64 JPEG, no data-URI prefix")


class TextClassificationRequest(BaseModel):
    """Request model for text classification."""

    text: str = Field(..., min_length=1, description="Citizen's description of the issue")


class ClassificationResponse(BaseModel):
    """Response model for classification endpoints."""

    result: ClassificationResult
    suggestion: IssueFormSuggestion
    progress: list[str] = Field(default_factory=list, description="Retry messages emitted")


class HealthResponse(BaseModel):
    """Response model for health endpoint."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")


class AIHealthResponse(BaseModel):
    """Response model for the model liveness probe."""

    available: bool = Field(..., description="Whether the model acknowledged the test prompt")
