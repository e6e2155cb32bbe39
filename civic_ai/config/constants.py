"""
Constants, enums, and static values.
"""

from enum import Enum


class PayloadKind(str, Enum):
    """What a classification request carries."""

    IMAGE = "image"
    TEXT = "text"


class IssueCategory(str, Enum):
    """Fixed issue categories used for filtering and display."""

    ROADS = "Roads"
    SANITATION = "Sanitation"
    ELECTRICITY = "Electricity"
    WATER_SUPPLY = "Water Supply"
    PUBLIC_SAFETY = "Public Safety"
    OTHERS = "Others"


class Urgency(str, Enum):
    """Urgency levels returned by the model."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Priority(str, Enum):
    """Priority values used by the issue report form."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class FailureKind(str, Enum):
    """Failure classes used to explain a fallback result."""

    BUSY = "busy"
    RATE_LIMITED = "rate_limited"
    NETWORK = "network"
    PARSE = "parse"
    GENERIC = "generic"


# Exact (case-sensitive) model labels and their category.
# "Road Damage", "Traffic Signal", "Street Sign", "Street Light" and "Water Leak"
# extend the base keyword set with labels the prompt offers. Without them
# "Road Damage" and "Street Light" would map to Others.
CATEGORY_KEYWORDS: dict[str, IssueCategory] = {
    "Pothole": IssueCategory.ROADS,
    "Road": IssueCategory.ROADS,
    "Road Damage": IssueCategory.ROADS,
    "Traffic": IssueCategory.ROADS,
    "Traffic Signal": IssueCategory.ROADS,
    "Street": IssueCategory.ROADS,
    "Street Sign": IssueCategory.ROADS,
    "Garbage": IssueCategory.SANITATION,
    "Waste": IssueCategory.SANITATION,
    "Sewage": IssueCategory.SANITATION,
    "Toilet": IssueCategory.SANITATION,
    "Power": IssueCategory.ELECTRICITY,
    "Electric": IssueCategory.ELECTRICITY,
    "Lighting": IssueCategory.ELECTRICITY,
    "Street Light": IssueCategory.ELECTRICITY,
    "Water": IssueCategory.WATER_SUPPLY,
    "Water Leak": IssueCategory.WATER_SUPPLY,
    "Plumbing": IssueCategory.WATER_SUPPLY,
    "Safety": IssueCategory.PUBLIC_SAFETY,
    "Crime": IssueCategory.PUBLIC_SAFETY,
    "Security": IssueCategory.PUBLIC_SAFETY,
}

URGENCY_TO_PRIORITY: dict[Urgency, Priority] = {
    Urgency.LOW: Priority.LOW,
    Urgency.MEDIUM: Priority.MEDIUM,
    Urgency.HIGH: Priority.HIGH,
}

# Lower-cased substrings that mark an error as transient.
RETRYABLE_ERROR_MARKERS: tuple[str, ...] = (
    "503",
    "overloaded",
    "429",
    "quota exceeded",
    "network request failed",
    "network error",
    "failed to fetch",
)

IMAGE_MIME_TYPE = "image/jpeg"

DEFAULT_MODEL_CATEGORY = "Other"
DEFAULT_IMAGE_DESCRIPTION = "Unable to analyze image"

FAILURE_MESSAGES: dict[FailureKind, str] = {
    FailureKind.BUSY: "AI service is currently busy. Please try again in a few minutes.",
    FailureKind.RATE_LIMITED: "Too many requests. Please wait a moment before trying again.",
    FailureKind.NETWORK: "Network error. Please check your connection and try again.",
}
GENERIC_IMAGE_FAILURE = "Unable to analyze image - please try again"
GENERIC_TEXT_FAILURE = "Unable to analyze text - please try again"

IMAGE_RETRY_MESSAGE = "AI service busy, retrying... ({attempt}/{max_attempts})"
TEXT_RETRY_MESSAGE = "AI service busy, retrying text analysis... ({attempt}/{max_attempts})"

CONNECTION_ACK_PHRASE = "api working"
