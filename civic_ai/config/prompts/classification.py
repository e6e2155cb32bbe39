"""Civic issue classification prompts."""

MODEL_CATEGORY_CHOICES = (
    "Road Damage",
    "Street Light",
    "Garbage",
    "Water Leak",
    "Traffic Signal",
    "Pothole",
    "Street Sign",
    "Other",
)

CONNECTION_TEST_PROMPT = 'Say "API working" if you can read this.'


def _category_choices() -> str:
    return ", ".join(MODEL_CATEGORY_CHOICES)


def build_image_classification_prompt() -> str:
    """Build the prompt sent alongside an issue photo."""
    return (
        "Analyze this image and identify if it shows a civic issue. If it does, provide:\n"
        f"1. Category: Choose from [{_category_choices()}]\n"
        "2. Description: A brief description of the issue\n"
        "3. Urgency: low, medium, or high based on safety and impact\n"
        "4. Confidence: 0-100 score of how confident you are this is a civic issue\n\n"
        'If this is not a civic issue, return category as "Not Applicable" and confidence as 0.\n\n'
        "Respond in JSON format only:\n"
        "{\n"
        '  "category": "string",\n'
        '  "description": "string",\n'
        '  "urgency": "low|medium|high",\n'
        '  "confidence": number\n'
        "}"
    )


def build_text_classification_prompt(user_text: str) -> str:
    """Build the prompt for a citizen's free-text issue description.

    Args:
        user_text: Description typed by the reporter.

    Returns:
        Prompt string asking for category, description and urgency as JSON.
    """
    return (
        "Analyze this civic issue description and provide:\n"
        f"1. Category: Choose from [{_category_choices()}]\n"
        "2. Description: A clear, detailed description of the issue\n"
        "3. Urgency: low, medium, or high based on safety and impact\n\n"
        f'User description: "{user_text}"\n\n'
        "Respond in JSON format only:\n"
        "{\n"
        '  "category": "string",\n'
        '  "description": "string",\n'
        '  "urgency": "low|medium|high"\n'
        "}"
    )
