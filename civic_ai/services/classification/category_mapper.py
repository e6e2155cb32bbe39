"""Projection of free-form model categories onto IssueCategory."""

from civic_ai.config.constants import CATEGORY_KEYWORDS, IssueCategory


def map_category(model_category: str | None) -> IssueCategory:
    """Map a model category label to one of the fixed categories.

    Exact (case-sensitive) keyword lookup first, then a case-insensitive
    search for a category name inside the label, in enum order. Falls back
    to ``IssueCategory.OTHERS``.
    """
    label = model_category or ""

    mapped = CATEGORY_KEYWORDS.get(label)
    if mapped is not None:
        return mapped

    lowered = label.lower()
    for category in IssueCategory:
        if category.value.lower() in lowered:
            return category

    return IssueCategory.OTHERS
