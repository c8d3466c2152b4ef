"""
Submission pipeline: fingerprint, duplicate check, categorize, score severity.

Stateless; the caller persists the result. Hashing and labelling failures
degrade (no fingerprint, other/mild) while a failed candidate fetch is
raised so it can never read as "not a duplicate".
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from .classifier.categorize import classify
from .classifier.labels import LabelSource, LabelSourceError, annotate
from .classifier.severity import score_severity
from .config import Settings
from .dedup.hash import DecodeError, compute_fingerprint, fingerprint_to_hex
from .dedup.resolver import DuplicateResolver
from .dedup.store import CandidateStore
from .logging import get_logger
from .model import Category, Coordinate, DuplicateVerdict, LabelAnnotation, Severity

logger = get_logger(__name__)


@dataclass(frozen=True)
class SubmissionResult:
    fingerprint: Optional[str]
    verdict: DuplicateVerdict
    category: Category
    severity: Severity
    labels: List[LabelAnnotation] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def status(self) -> str:
        return "duplicate" if self.verdict.is_duplicate else "pending"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "fingerprint": self.fingerprint,
            "status": self.status,
            "duplicate": self.verdict.to_dict(),
            "category": self.category.value,
            "severity": self.severity.value,
            "labels": [asdict(label) for label in self.labels],
            "warnings": list(self.warnings),
        }


def process_submission(
    image_bytes: bytes,
    coordinate: Optional[Coordinate],
    label_source: LabelSource,
    store: CandidateStore,
    settings: Optional[Settings] = None,
) -> SubmissionResult:
    """
    Run the full decision engine for one new report.

    Args:
        image_bytes: Encoded image of the report
        coordinate: Report location, if the submitter shared one
        label_source: Label-detection collaborator
        store: Candidate store holding earlier reports
        settings: Thresholds and keyword sets (defaults if omitted)

    Returns:
        SubmissionResult with verdict, category and severity

    Raises:
        StoreReadError: If the candidate fetch fails
    """
    settings = settings or Settings()
    warnings: List[str] = []

    fingerprint: Optional[str] = None
    try:
        fingerprint = fingerprint_to_hex(compute_fingerprint(image_bytes))
    except DecodeError as exc:
        logger.warning(f"Continuing without fingerprint: {exc}")
        warnings.append(f"fingerprint unavailable: {exc}")

    verdict = DuplicateResolver(store, settings).check(coordinate, fingerprint)

    labels: List[LabelAnnotation] = []
    try:
        labels = annotate(label_source, image_bytes)
        category = classify([label.description for label in labels], settings.keywords)
        severity = score_severity(labels, category)
    except LabelSourceError as exc:
        logger.warning(f"Classification failed, defaulting to other/mild: {exc}")
        warnings.append(f"classification unavailable: {exc}")
        category, severity = Category.OTHER, Severity.MILD

    result = SubmissionResult(
        fingerprint=fingerprint,
        verdict=verdict,
        category=category,
        severity=severity,
        labels=labels,
        warnings=warnings,
    )
    logger.info(f"Submission processed: status={result.status}, category={category.value}, severity={severity.value}")
    return result
