"""Test configuration for pytest."""

import io
import logging
import os
import pytest
from PIL import Image, ImageDraw


@pytest.fixture(autouse=True)
def configure_test_logging():
    """Configure logging for tests to be minimal."""
    os.environ['CIVICSCAN_LOG_LEVEL'] = 'WARNING'
    logging.getLogger().setLevel(logging.WARNING)


def _encode(img: Image.Image, fmt: str = 'PNG') -> bytes:
    buffer = io.BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def make_image_bytes():
    """Factory fixture: encode a PIL image to bytes."""
    return _encode


@pytest.fixture
def split_image():
    """Factory fixture: image whose left half is light and right half is dark."""
    def _make(size=(16, 16), mode='RGB', light='white', dark='black') -> Image.Image:
        width, height = size
        img = Image.new(mode, size, color=light)
        ImageDraw.Draw(img).rectangle([width // 2, 0, width - 1, height - 1], fill=dark)
        return img
    return _make


@pytest.fixture
def split_image_bytes(split_image):
    return _encode(split_image())
