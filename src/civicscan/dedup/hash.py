"""Average-hash fingerprints for submitted report images."""

import io
import re
from pathlib import Path
from typing import Optional, Union

import imagehash
import numpy as np
from PIL import Image

from ..logging import get_logger

logger = get_logger(__name__)

HASH_SIZE = 8
HEX_LENGTH = HASH_SIZE * HASH_SIZE // 4

_HEX_PATTERN = re.compile(r"^[0-9a-f]{%d}$" % HEX_LENGTH)


class DecodeError(Exception):
    """Raised when image bytes cannot be decoded as a raster image."""


def compute_fingerprint(image_bytes: bytes) -> imagehash.ImageHash:
    """
    Compute the 64-bit average hash of an encoded image.

    The image is squashed to 8x8 with a box filter (aspect ratio is not
    preserved), reduced to luminance, and each pixel becomes a 1 bit when it
    is strictly brighter than the grid mean. Bits are laid out row-major,
    top-left first.

    Args:
        image_bytes: Encoded image data (PNG, JPEG, ...)

    Returns:
        ImageHash wrapping an 8x8 boolean array

    Raises:
        DecodeError: If the bytes are not a decodable image
    """
    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            img.load()
            # Palette images would otherwise be resampled by index
            if img.mode != 'RGB':
                img = img.convert('RGB')
            small = img.resize((HASH_SIZE, HASH_SIZE), Image.Resampling.BOX).convert('L')
    except (OSError, EOFError, ValueError, SyntaxError, Image.DecompressionBombError) as exc:
        raise DecodeError(f"Failed to decode image: {exc}") from exc

    pixels = np.asarray(small, dtype=np.float64)
    fingerprint = imagehash.ImageHash(pixels > pixels.mean())

    logger.debug(f"Computed fingerprint {fingerprint}")
    return fingerprint


def compute_fingerprint_file(image_path: Path) -> imagehash.ImageHash:
    """Read an image from disk and fingerprint it."""
    try:
        data = Path(image_path).read_bytes()
    except OSError as exc:
        raise DecodeError(f"Failed to read {image_path}: {exc}") from exc
    return compute_fingerprint(data)


def fingerprint_to_hex(fingerprint: imagehash.ImageHash) -> str:
    """Render a fingerprint as lowercase, zero-padded hex."""
    return str(fingerprint)


def parse_fingerprint(value: Union[str, imagehash.ImageHash, None]) -> Optional[imagehash.ImageHash]:
    """
    Parse a stored fingerprint.

    Returns None for anything that is not an ImageHash or a 16-character hex
    string, so callers can treat it as incomparable.
    """
    if isinstance(value, imagehash.ImageHash):
        return value
    if not isinstance(value, str):
        return None

    normalized = value.strip().lower()
    if not _HEX_PATTERN.match(normalized):
        return None
    return imagehash.hex_to_hash(normalized)
