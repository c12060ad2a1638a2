"""Tests for captured image validation."""

import pytest

from blog_cards.images import InvalidImageError, detect_image_format, validate_image

JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00" + b"\x00" * 64


def test_detect_png(png_bytes):
    assert detect_image_format(png_bytes) == "png"


def test_detect_jpeg():
    assert detect_image_format(JPEG_BYTES) == "jpeg"


def test_detect_unknown():
    assert detect_image_format(b"plain text, definitely not an image") is None


def test_validate_accepts_expected_type(png_bytes):
    validate_image(png_bytes, "png")
    validate_image(JPEG_BYTES, "jpeg")


def test_validate_rejects_wrong_type(png_bytes):
    with pytest.raises(InvalidImageError, match="expected jpeg"):
        validate_image(png_bytes, "jpeg")


def test_validate_rejects_truncated():
    with pytest.raises(InvalidImageError, match="too small"):
        validate_image(b"\x89PNG\r\n\x1a\n", "png")
