"""Perceptual fingerprinting and duplicate resolution for issue reports."""

from .hash import DecodeError, compute_fingerprint, compute_fingerprint_file, fingerprint_to_hex, parse_fingerprint
from .distance import INCOMPARABLE, hamming_distance
from .store import CandidateStore, InMemoryCandidateStore, JsonCandidateStore, StoreReadError
from .resolver import DuplicateResolver, resolve

__all__ = [
    "DecodeError",
    "compute_fingerprint",
    "compute_fingerprint_file",
    "fingerprint_to_hex",
    "parse_fingerprint",
    "INCOMPARABLE",
    "hamming_distance",
    "CandidateStore",
    "InMemoryCandidateStore",
    "JsonCandidateStore",
    "StoreReadError",
    "DuplicateResolver",
    "resolve",
]
