"""Distance metric for fingerprint comparison."""

import math
from typing import Union

import imagehash

from .hash import parse_fingerprint

# Returned when two fingerprints cannot be compared
INCOMPARABLE = math.inf

FingerprintLike = Union[str, imagehash.ImageHash, None]


def hamming_distance(a: FingerprintLike, b: FingerprintLike) -> Union[int, float]:
    """
    Calculate Hamming distance between two fingerprints.

    Args:
        a: First fingerprint, as an ImageHash or hex string
        b: Second fingerprint

    Returns:
        Number of differing bits, or INCOMPARABLE if either side is
        malformed or the two were built from different grid sizes
    """
    hash_a = parse_fingerprint(a)
    hash_b = parse_fingerprint(b)
    if hash_a is None or hash_b is None:
        return INCOMPARABLE
    if hash_a.hash.shape != hash_b.hash.shape:
        return INCOMPARABLE
    return int(hash_a - hash_b)
