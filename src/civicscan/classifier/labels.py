"""
Label source interface.

Label detection itself happens in an external vision service; civicscan
only consumes its output. Adapters subclass LabelSource.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List

from ..logging import get_logger
from ..model import LabelAnnotation

logger = get_logger(__name__)


class LabelSourceError(Exception):
    """Raised when the label source fails. An empty label list is not a failure."""


class LabelSource(ABC):

    @abstractmethod
    def detect_labels(self, image: bytes) -> List[LabelAnnotation]:
        """Return labels for the image, most relevant first."""


class StaticLabelSource(LabelSource):
    """Returns the same labels for every image."""

    def __init__(self, labels: Iterable[LabelAnnotation]):
        self.labels = list(labels)

    def detect_labels(self, image: bytes) -> List[LabelAnnotation]:
        return list(self.labels)


class JsonLabelSource(LabelSource):
    """
    Labels saved from a label-detection response.

    The file holds either a list of annotations or an object with a
    ``labelAnnotations`` list. Each annotation needs a ``description`` and
    a ``score`` or ``confidence``.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def detect_labels(self, image: bytes) -> List[LabelAnnotation]:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise LabelSourceError(f"Failed to read labels from {self.path}: {exc}") from exc

        if isinstance(data, dict):
            data = data.get("labelAnnotations")
        if not isinstance(data, list):
            raise LabelSourceError(f"Expected a list of label annotations in {self.path}")

        try:
            return [LabelAnnotation.from_dict(item) for item in data]
        except (AttributeError, TypeError, ValueError) as exc:
            raise LabelSourceError(f"Malformed label annotation in {self.path}: {exc}") from exc


def annotate(source: LabelSource, image: bytes) -> List[LabelAnnotation]:
    """
    Fetch labels for an image.

    Raises:
        LabelSourceError: If the source fails for any reason
    """
    try:
        labels = list(source.detect_labels(image))
    except LabelSourceError:
        raise
    except Exception as exc:
        raise LabelSourceError(f"Label detection failed: {exc}") from exc

    logger.debug(f"Label source returned {len(labels)} labels: {[label.description for label in labels]}")
    return labels
