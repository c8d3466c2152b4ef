"""
Value types shared by the hashing, geo, classification and dedup modules.

Everything here is immutable and created per submission, except
CandidateReport which mirrors a record owned by the external report store.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

import imagehash


class Category(Enum):
    """Issue categories, in tie-break order (OTHER is the fallback)."""
    POTHOLE = "pothole"
    GARBAGE = "garbage"
    WATER_LEAK = "water-leak"
    PROPERTY_DAMAGE = "property-damage"
    ENVIRONMENT = "environment"
    OTHER = "other"


class Severity(Enum):
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    def __lt__(self, other: "Severity") -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: "Severity") -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: "Severity") -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: "Severity") -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank


_SEVERITY_RANK = {Severity.MILD: 0, Severity.MODERATE: 1, Severity.SEVERE: 2}


class DuplicateReason(Enum):
    """Which evidence justified a duplicate verdict."""
    NONE = "none"
    LOCATION = "location"
    IMAGE = "image"
    BOTH = "both"


@dataclass(frozen=True)
class LabelAnnotation:
    """A single label produced by the external label-detection service."""
    description: str
    confidence: float

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LabelAnnotation":
        """Build from ``{"description", "confidence"}`` or the wire form ``{"description", "score"}``."""
        confidence = data.get("confidence", data.get("score", 0.0))
        return cls(description=str(data.get("description") or ""), confidence=float(confidence or 0.0))


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float

    @classmethod
    def resolve(cls, value: Any) -> Optional["Coordinate"]:
        """
        Resolve a stored location into a Coordinate.

        Accepts an existing Coordinate, a mapping keyed by latitude/longitude,
        lat/lng, lat/lon or _latitude/_longitude (serialized geo points), any
        object with latitude and longitude attributes, or a (lat, lon) pair.
        Returns None when the value is missing or incomplete.
        """
        if value is None:
            return None
        if isinstance(value, Coordinate):
            return value

        if isinstance(value, Mapping):
            for lat_key, lon_key in _COORDINATE_KEYS:
                lat, lon = value.get(lat_key), value.get(lon_key)
                if lat is not None and lon is not None:
                    return cls._from_pair(lat, lon)
            return None

        lat = getattr(value, "latitude", None)
        lon = getattr(value, "longitude", None)
        if lat is not None and lon is not None:
            return cls._from_pair(lat, lon)

        if isinstance(value, (list, tuple)) and len(value) == 2:
            return cls._from_pair(value[0], value[1])

        return None

    @classmethod
    def _from_pair(cls, lat: Any, lon: Any) -> Optional["Coordinate"]:
        try:
            return cls(latitude=float(lat), longitude=float(lon))
        except (TypeError, ValueError):
            return None


_COORDINATE_KEYS = (
    ("latitude", "longitude"),
    ("lat", "lng"),
    ("lat", "lon"),
    ("_latitude", "_longitude"),
)

_FINGERPRINT_KEYS = ("imageHash", "image_hash", "fingerprint")


@dataclass(frozen=True)
class CandidateReport:
    """A previously stored report, read-only to the engine."""
    id: str
    coordinate: Optional[Coordinate] = None
    fingerprint: Optional[Union[str, imagehash.ImageHash]] = None

    @classmethod
    def from_record(cls, report_id: str, record: Mapping[str, Any]) -> "CandidateReport":
        """Build a candidate from a raw store record."""
        coordinate = Coordinate.resolve(record.get("location"))
        if coordinate is None:
            coordinate = Coordinate.resolve(
                {"latitude": record.get("latitude"), "longitude": record.get("longitude")}
            )

        fingerprint = None
        for key in _FINGERPRINT_KEYS:
            value = record.get(key)
            if value:
                fingerprint = value
                break

        return cls(id=str(report_id), coordinate=coordinate, fingerprint=fingerprint)


@dataclass(frozen=True)
class DuplicateVerdict:
    is_duplicate: bool
    duplicate_of_id: Optional[str]
    reason: DuplicateReason

    @classmethod
    def not_duplicate(cls) -> "DuplicateVerdict":
        return cls(is_duplicate=False, duplicate_of_id=None, reason=DuplicateReason.NONE)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "is_duplicate": self.is_duplicate,
            "duplicate_of_id": self.duplicate_of_id,
            "reason": self.reason.value,
        }
