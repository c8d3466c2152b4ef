"""
civicscan issue classifier

Maps label-detection output to an issue category and a severity level.
"""

from .categorize import classify, score_categories
from .severity import score_severity
from .labels import JsonLabelSource, LabelSource, LabelSourceError, StaticLabelSource, annotate

__all__ = [
    "classify",
    "score_categories",
    "score_severity",
    "JsonLabelSource",
    "LabelSource",
    "LabelSourceError",
    "StaticLabelSource",
    "annotate",
]
