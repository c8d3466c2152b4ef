"""
Duplicate resolution against previously stored reports.

Candidates are scanned in the order the store returns them and the first
qualifying candidate wins. Location within the radius is sufficient on its
own unless both sides carry a fingerprint, in which case the images must
agree too. Image-only matching is used when location cannot be compared.
"""

from typing import Iterable, Optional

from ..config import Settings, DEFAULT_HAMMING_THRESHOLD, DEFAULT_LOCATION_RADIUS_METERS
from ..geo import distance_meters
from ..logging import get_logger
from ..model import CandidateReport, Coordinate, DuplicateReason, DuplicateVerdict
from .distance import FingerprintLike, hamming_distance
from .store import CandidateStore, StoreReadError

logger = get_logger(__name__)


def _has_fingerprint(value: FingerprintLike) -> bool:
    # A present but malformed fingerprint still counts; it just never matches
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def resolve(
    new_coordinate: Optional[Coordinate],
    new_fingerprint: FingerprintLike,
    candidates: Iterable[CandidateReport],
    location_radius_meters: float = DEFAULT_LOCATION_RADIUS_METERS,
    hamming_threshold: int = DEFAULT_HAMMING_THRESHOLD,
) -> DuplicateVerdict:
    """
    Decide whether a new submission duplicates one of the candidates.

    Args:
        new_coordinate: Location of the new report, if any
        new_fingerprint: Fingerprint of the new image, if any
        candidates: Stored reports, scanned in order
        location_radius_meters: Maximum distance for a location match
        hamming_threshold: Maximum Hamming distance for an image match

    Returns:
        DuplicateVerdict for the first qualifying candidate, or a
        not-duplicate verdict
    """
    new_has_fingerprint = _has_fingerprint(new_fingerprint)

    for candidate in candidates:
        both_fingerprinted = new_has_fingerprint and _has_fingerprint(candidate.fingerprint)

        if new_coordinate is not None and candidate.coordinate is not None:
            distance = distance_meters(new_coordinate, candidate.coordinate)
            if distance <= location_radius_meters:
                if not both_fingerprinted:
                    logger.info(f"Duplicate of {candidate.id} by location ({distance:.1f}m)")
                    return DuplicateVerdict(True, candidate.id, DuplicateReason.LOCATION)

                bits = hamming_distance(new_fingerprint, candidate.fingerprint)
                if bits <= hamming_threshold:
                    logger.info(f"Duplicate of {candidate.id} by location and image ({distance:.1f}m, {bits} bits)")
                    return DuplicateVerdict(True, candidate.id, DuplicateReason.BOTH)

                logger.debug(f"Rejected {candidate.id}: co-located but image differs ({bits} bits)")
                continue

        if both_fingerprinted:
            bits = hamming_distance(new_fingerprint, candidate.fingerprint)
            if bits <= hamming_threshold:
                logger.info(f"Duplicate of {candidate.id} by image ({bits} bits)")
                return DuplicateVerdict(True, candidate.id, DuplicateReason.IMAGE)
            logger.debug(f"Rejected {candidate.id}: image distance {bits}")

    return DuplicateVerdict.not_duplicate()


class DuplicateResolver:
    """Fetches candidates from a store and resolves a submission against them."""

    def __init__(self, store: CandidateStore, settings: Optional[Settings] = None):
        self.store = store
        self.settings = settings or Settings()

    def check(self, coordinate: Optional[Coordinate], fingerprint: FingerprintLike) -> DuplicateVerdict:
        """
        Run a duplicate check for one submission.

        Raises:
            StoreReadError: If the candidate fetch fails
        """
        try:
            candidates = list(self.store.fetch_candidates())
        except StoreReadError:
            raise
        except Exception as exc:
            raise StoreReadError(f"Candidate fetch failed: {exc}") from exc

        logger.debug(f"Scanning {len(candidates)} candidates")
        return resolve(
            coordinate,
            fingerprint,
            candidates,
            location_radius_meters=self.settings.location_radius_meters,
            hamming_threshold=self.settings.hamming_threshold,
        )
