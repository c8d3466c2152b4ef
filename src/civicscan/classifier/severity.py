"""
Category-specific severity rules.

Most categories look for exact label names; garbage instead thresholds the
confidence of its matching labels.
"""

from typing import Callable, Dict, Iterable, List, Sequence, Union

from ..logging import get_logger
from ..model import Category, LabelAnnotation, Severity

logger = get_logger(__name__)

POTHOLE_SEVERE = {"sinkhole", "crater", "deep"}
POTHOLE_MODERATE = {"pothole", "puddle", "road", "tar"}

GARBAGE_SEVERE = {"pollution", "dumpster", "waste container"}
GARBAGE_MODERATE = {"garbage", "trash", "litter", "plastic bag"}
GARBAGE_SEVERE_THRESHOLD = 0.70
GARBAGE_MODERATE_THRESHOLD = 0.50

WATER_SEVERE = {"flood", "flooding"}
WATER_MODERATE = {"puddle", "rain"}

PROPERTY_DAMAGE_SEVERE = {"collapse", "damage"}
PROPERTY_DAMAGE_MODERATE = {"crack", "wall"}

ENVIRONMENT_SEVERE = {"wildfire", "fire"}
ENVIRONMENT_MODERATE = {"pollution", "smoke"}


def max_confidence_for(labels: Iterable[LabelAnnotation], words: Iterable[str]) -> float:
    """Highest confidence among labels named exactly one of ``words``; 0 if none."""
    words = set(words)
    best = 0.0
    for label in labels:
        if label.description.lower() in words:
            best = max(best, label.confidence)
    return best


def _by_presence(severe: set, moderate: set) -> Callable[[Sequence[LabelAnnotation]], Severity]:
    def rule(labels: Sequence[LabelAnnotation]) -> Severity:
        names = {label.description.lower() for label in labels}
        if names & severe:
            return Severity.SEVERE
        if names & moderate:
            return Severity.MODERATE
        return Severity.MILD
    return rule


def _garbage(labels: Sequence[LabelAnnotation]) -> Severity:
    if max_confidence_for(labels, GARBAGE_SEVERE) > GARBAGE_SEVERE_THRESHOLD:
        return Severity.SEVERE
    if max_confidence_for(labels, GARBAGE_MODERATE) > GARBAGE_MODERATE_THRESHOLD:
        return Severity.MODERATE
    return Severity.MILD


_RULES: Dict[Category, Callable[[Sequence[LabelAnnotation]], Severity]] = {
    Category.POTHOLE: _by_presence(POTHOLE_SEVERE, POTHOLE_MODERATE),
    Category.GARBAGE: _garbage,
    Category.WATER_LEAK: _by_presence(WATER_SEVERE, WATER_MODERATE),
    Category.PROPERTY_DAMAGE: _by_presence(PROPERTY_DAMAGE_SEVERE, PROPERTY_DAMAGE_MODERATE),
    Category.ENVIRONMENT: _by_presence(ENVIRONMENT_SEVERE, ENVIRONMENT_MODERATE),
}


def score_severity(labels: Sequence[LabelAnnotation], category: Union[Category, str]) -> Severity:
    """
    Score how severe a report is, given its labels and category.

    Unknown categories, Category.OTHER, and labels with no matching
    evidence all yield Severity.MILD.
    """
    if isinstance(category, str):
        try:
            category = Category(category)
        except ValueError:
            return Severity.MILD

    rule = _RULES.get(category)
    if rule is None:
        return Severity.MILD

    labels: List[LabelAnnotation] = list(labels)
    severity = rule(labels)
    logger.debug(f"Severity for {category.value} from {len(labels)} labels: {severity.value}")
    return severity
