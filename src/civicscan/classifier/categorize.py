"""
Keyword-based issue categorization.

Each label is compared against every keyword of every category; a pair
scores one point when either string contains the other. Repeated labels or
overlapping keywords are counted every time they match.
"""

from typing import Dict, Iterable, List, Optional

from ..config import CategoryKeywords
from ..logging import get_logger
from ..model import Category

logger = get_logger(__name__)

_DEFAULT_KEYWORDS = CategoryKeywords()


def fuzzy_match(label: str, keyword: str) -> bool:
    return keyword in label or label in keyword


def score_category(labels: Iterable[str], keywords: Iterable[str]) -> int:
    keywords = list(keywords)
    return sum(1 for label in labels for keyword in keywords if fuzzy_match(label, keyword))


def score_categories(labels: Iterable[str], keywords: Optional[CategoryKeywords] = None) -> Dict[Category, int]:
    """Score every category, preserving tie-break order."""
    keywords = keywords or _DEFAULT_KEYWORDS
    lowered: List[str] = [label.lower() for label in labels]
    return {category: score_category(lowered, words) for category, words in keywords.ordered()}


def classify(labels: Iterable[str], keywords: Optional[CategoryKeywords] = None) -> Category:
    """
    Pick the category whose keywords best match the labels.

    Args:
        labels: Label descriptions from the label source
        keywords: Keyword sets to score against (defaults to the built-in lists)

    Returns:
        Highest scoring category; earlier categories win ties, and
        Category.OTHER is returned when nothing scores
    """
    scores = score_categories(labels, keywords)

    best_category, best_score = Category.OTHER, 0
    for category, score in scores.items():
        if score > best_score:
            best_category, best_score = category, score

    summary = {c.value: s for c, s in scores.items()}
    logger.debug(f"Category scores: {summary} -> {best_category.value}")
    return best_category
