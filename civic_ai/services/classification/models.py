"""Classification service models."""

from pydantic import BaseModel, Field, model_validator

from civic_ai.config.constants import (
    FailureKind,
    IssueCategory,
    PayloadKind,
    Priority,
    Urgency,
)


class ClassificationRequest(BaseModel):
    """Input to the classification pipeline."""

    payload_kind: PayloadKind
    image_data: str | None = None  # base64, no data-URI prefix
    text: str | None = None

    @model_validator(mode="after")
    def validate_payload(self) -> "ClassificationRequest":
        if self.payload_kind is PayloadKind.IMAGE:
            if self.image_data is None or self.text is not None:
                raise ValueError("image requests carry image_data only")
        else:
            if self.text is None or self.image_data is not None:
                raise ValueError("text requests carry text only")
        return self

    @classmethod
    def for_image(cls, image_data: str) -> "ClassificationRequest":
        return cls(payload_kind=PayloadKind.IMAGE, image_data=image_data)

    @classmethod
    def for_text(cls, text: str) -> "ClassificationRequest":
        return cls(payload_kind=PayloadKind.TEXT, text=text)


class ClassificationResult(BaseModel):
    """Result from civic issue classification."""

    category: str = Field(..., description="Category as returned by the model")
    mapped_category: IssueCategory
    description: str
    urgency: Urgency = Urgency.MEDIUM
    confidence: int | None = Field(None, ge=0, le=100, description="Image classification only")
    is_fallback: bool = False
    failure_kind: FailureKind | None = None
    failure_message: str | None = None


class IssueFormSuggestion(BaseModel):
    """Report form values derived from a classification result."""

    title: str
    category: IssueCategory
    priority: Priority
    description: str
    confidence: int | None = None
    auto_fill: bool
    message: str
