"""
Candidate store interface and the stores shipped with civicscan.

The engine only ever performs one bulk read per duplicate check. Real
deployments plug their document store in by subclassing CandidateStore.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Tuple, Union

from ..logging import get_logger
from ..model import CandidateReport

logger = get_logger(__name__)


class StoreReadError(Exception):
    """Raised when the candidate set cannot be fetched."""


class CandidateStore(ABC):
    """Source of previously stored reports to compare against."""

    @abstractmethod
    def fetch_candidates(self) -> List[CandidateReport]:
        """
        Return every report to scan, in scan order.

        Raises:
            StoreReadError: If the store cannot be read
        """


class InMemoryCandidateStore(CandidateStore):
    """Fixed snapshot of reports, mainly for tests and embedding."""

    def __init__(self, reports: Iterable[Union[CandidateReport, Tuple[str, Mapping[str, Any]]]] = ()):
        self._reports: List[CandidateReport] = []
        for report in reports:
            if isinstance(report, CandidateReport):
                self._reports.append(report)
            else:
                report_id, record = report
                self._reports.append(CandidateReport.from_record(report_id, record))

    def fetch_candidates(self) -> List[CandidateReport]:
        return list(self._reports)


class JsonCandidateStore(CandidateStore):
    """
    Reports exported to a JSON file.

    Accepts either a list of records or an object with a ``reports`` list.
    Each record needs an ``id``; location and fingerprint fields are read
    by CandidateReport.from_record.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def fetch_candidates(self) -> List[CandidateReport]:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreReadError(f"Failed to read reports from {self.path}: {exc}") from exc

        if isinstance(data, dict):
            data = data.get("reports")
        if not isinstance(data, list):
            raise StoreReadError(f"Expected a list of reports in {self.path}")

        candidates = []
        for index, record in enumerate(data):
            if not isinstance(record, dict) or record.get("id") is None:
                logger.warning(f"Skipping report #{index} in {self.path}: missing id")
                continue
            candidates.append(CandidateReport.from_record(record["id"], record))

        logger.info(f"Loaded {len(candidates)} candidate reports from {self.path}")
        return candidates
