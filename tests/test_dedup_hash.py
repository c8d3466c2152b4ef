"""Tests for average-hash fingerprint computation."""

import pytest
from PIL import Image, ImageDraw
import imagehash

from civicscan.dedup.hash import (
    DecodeError,
    compute_fingerprint,
    compute_fingerprint_file,
    fingerprint_to_hex,
    parse_fingerprint,
)


class TestComputeFingerprint:
    def test_left_light_right_dark(self, split_image_bytes):
        """Each row reads 11110000 when the left half is brighter."""
        fingerprint = compute_fingerprint(split_image_bytes)

        assert isinstance(fingerprint, imagehash.ImageHash)
        assert fingerprint.hash.shape == (8, 8)
        assert fingerprint_to_hex(fingerprint) == "f0f0f0f0f0f0f0f0"

    def test_rows_are_most_significant_first(self, make_image_bytes):
        """Top rows map to the high-order bits."""
        img = Image.new('RGB', (8, 8), 'black')
        ImageDraw.Draw(img).rectangle([0, 0, 7, 3], fill='white')

        assert fingerprint_to_hex(compute_fingerprint(make_image_bytes(img))) == "ffffffff00000000"

    def test_uniform_image_has_no_bits_set(self, make_image_bytes):
        """No pixel is strictly above the mean of a flat image."""
        img = Image.new('RGB', (40, 30), (120, 60, 200))

        assert fingerprint_to_hex(compute_fingerprint(make_image_bytes(img))) == "0000000000000000"

    def test_aspect_ratio_is_discarded(self, split_image, make_image_bytes):
        """A wide image is squashed to 8x8 rather than cropped or padded."""
        wide = split_image(size=(64, 8))

        assert fingerprint_to_hex(compute_fingerprint(make_image_bytes(wide))) == "f0f0f0f0f0f0f0f0"

    @pytest.mark.parametrize("mode", ["L", "RGBA", "P"])
    def test_other_modes(self, split_image, make_image_bytes, mode):
        """Grayscale, alpha and palette images hash like their RGB equivalent."""
        img = split_image(mode='RGB').convert(mode)

        assert fingerprint_to_hex(compute_fingerprint(make_image_bytes(img))) == "f0f0f0f0f0f0f0f0"

    def test_deterministic(self, split_image, make_image_bytes):
        """Identical bytes always give the identical fingerprint."""
        data = make_image_bytes(split_image(size=(50, 37)), 'JPEG')

        first = fingerprint_to_hex(compute_fingerprint(data))
        second = fingerprint_to_hex(compute_fingerprint(data))

        assert first == second
        assert len(first) == 16

    def test_similar_images_are_close(self, split_image, make_image_bytes):
        """Small visual differences keep the Hamming distance small."""
        original = split_image(size=(64, 64))
        tweaked = original.copy()
        tweaked.putpixel((1, 1), (200, 0, 0))

        a = compute_fingerprint(make_image_bytes(original))
        b = compute_fingerprint(make_image_bytes(tweaked))

        assert a - b <= 2

    def test_garbage_bytes_raise(self):
        with pytest.raises(DecodeError):
            compute_fingerprint(b"not an image")

    def test_empty_bytes_raise(self):
        with pytest.raises(DecodeError):
            compute_fingerprint(b"")

    def test_truncated_image_raises(self, split_image, make_image_bytes):
        data = make_image_bytes(split_image(size=(64, 64)))

        with pytest.raises(DecodeError):
            compute_fingerprint(data[:40])


class TestComputeFingerprintFile:
    def test_reads_from_disk(self, tmp_path, split_image):
        img_path = tmp_path / "report.png"
        split_image().save(img_path)

        assert fingerprint_to_hex(compute_fingerprint_file(img_path)) == "f0f0f0f0f0f0f0f0"

    def test_nonexistent_file(self, tmp_path):
        with pytest.raises(DecodeError):
            compute_fingerprint_file(tmp_path / "missing.png")


class TestParseFingerprint:
    def test_hex_round_trip(self):
        parsed = parse_fingerprint("00ff00ff00ff00ff")

        assert parsed is not None
        assert fingerprint_to_hex(parsed) == "00ff00ff00ff00ff"

    def test_uppercase_is_normalized(self):
        assert fingerprint_to_hex(parse_fingerprint("00FF00FF00FF00FF")) == "00ff00ff00ff00ff"

    def test_image_hash_passes_through(self):
        fingerprint = imagehash.hex_to_hash("0123456789abcdef")

        assert parse_fingerprint(fingerprint) is fingerprint

    @pytest.mark.parametrize("value", [None, "", "abc", "00ff00ff00ff00f", "00ff00ff00ff00ff00", "zzzzzzzzzzzzzzzz", 42])
    def test_malformed_values(self, value):
        assert parse_fingerprint(value) is None
