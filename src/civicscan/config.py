import math
import os
from dataclasses import dataclass, field
from typing import Iterator, Tuple

from .model import Category

POTHOLE_KEYWORDS = (
    "pothole", "sinkhole", "crack", "hole", "road surface",
    "asphalt", "tar", "puddle", "damaged road",
)

GARBAGE_KEYWORDS = (
    "garbage", "waste", "trash", "litter", "pollution",
    "dumpster", "bin", "plastic bag", "waste container",
)

WATER_KEYWORDS = (
    "flood", "flooding", "water leak", "leak", "seepage",
    "sewage", "pipe leak", "burst pipe", "puddle", "rain water",
)

PROPERTY_DAMAGE_KEYWORDS = (
    "crack", "broken wall", "broken house",
    "damaged wall", "construction damage",
    "building damage", "roof damage", "structural damage",
)

ENVIRONMENT_KEYWORDS = (
    "forest", "tree", "wildfire", "smoke",
    "pollution", "fire", "jungle", "deforestation",
)

DEFAULT_LOCATION_RADIUS_METERS = 50.0
DEFAULT_HAMMING_THRESHOLD = 8


@dataclass(frozen=True)
class CategoryKeywords:
    pothole: Tuple[str, ...] = POTHOLE_KEYWORDS
    garbage: Tuple[str, ...] = GARBAGE_KEYWORDS
    water: Tuple[str, ...] = WATER_KEYWORDS
    property_damage: Tuple[str, ...] = PROPERTY_DAMAGE_KEYWORDS
    environment: Tuple[str, ...] = ENVIRONMENT_KEYWORDS

    def ordered(self) -> Iterator[Tuple[Category, Tuple[str, ...]]]:
        """Yield (category, keywords) in tie-break order."""
        yield Category.POTHOLE, self.pothole
        yield Category.GARBAGE, self.garbage
        yield Category.WATER_LEAK, self.water
        yield Category.PROPERTY_DAMAGE, self.property_damage
        yield Category.ENVIRONMENT, self.environment


@dataclass
class Settings:
    # Some deployments used 100m; 50m is the default.
    location_radius_meters: float = DEFAULT_LOCATION_RADIUS_METERS
    hamming_threshold: int = DEFAULT_HAMMING_THRESHOLD
    keywords: CategoryKeywords = field(default_factory=CategoryKeywords)

    def __post_init__(self) -> None:
        if math.isnan(self.location_radius_meters) or self.location_radius_meters < 0:
            raise ValueError(f"location_radius_meters must be >= 0, got {self.location_radius_meters}")
        if self.hamming_threshold < 0:
            raise ValueError(f"hamming_threshold must be >= 0, got {self.hamming_threshold}")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings, overriding defaults from CIVICSCAN_* environment variables."""
        return cls(
            location_radius_meters=_env_number("CIVICSCAN_LOCATION_RADIUS_METERS", float, DEFAULT_LOCATION_RADIUS_METERS),
            hamming_threshold=_env_number("CIVICSCAN_HAMMING_THRESHOLD", int, DEFAULT_HAMMING_THRESHOLD),
        )


def _env_number(name, convert, default):
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return convert(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a valid {convert.__name__}, got {raw!r}") from exc
