"""Great-circle distance between report locations."""

import math

from .model import Coordinate

EARTH_RADIUS_METERS = 6_371_000


def distance_meters(a: Coordinate, b: Coordinate) -> float:
    """
    Haversine distance between two coordinates in meters.

    Inputs are plain degrees and are not range checked. NaN or infinite
    components give a NaN result instead of raising.
    """
    values = (a.latitude, a.longitude, b.latitude, b.longitude)
    if not all(math.isfinite(v) for v in values):
        return math.nan

    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    delta_phi = math.radians(b.latitude - a.latitude)
    delta_lambda = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(delta_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    )
    # Rounding near antipodal points can push h past 1
    if h > 1.0:
        h = 1.0

    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_METERS * c
