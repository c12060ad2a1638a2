"""Validation for captured card images."""

from __future__ import annotations

from typing import Optional

from filetype import guess

MIN_IMAGE_BYTES = 32


class InvalidImageError(ValueError):
    """Raised when screenshot bytes are not the expected kind of image."""


def detect_image_format(data: bytes) -> Optional[str]:
    """Detect image type using filetype; returns lowercase extension."""
    kind = guess(data)
    if kind and kind.mime.startswith("image/"):
        ext = kind.extension.lower()
        if ext == "jpg":
            return "jpeg"
        return ext
    return None


def validate_image(data: bytes, expected_type: str) -> None:
    """Check that data is a plausible image of expected_type ("png" or "jpeg")."""
    if len(data) < MIN_IMAGE_BYTES:
        raise InvalidImageError(f"Screenshot too small ({len(data)} bytes)")
    detected = detect_image_format(data)
    if detected == "apng":
        detected = "png"
    if detected != expected_type:
        raise InvalidImageError(
            f"Screenshot is {detected or 'not an image'}, expected {expected_type}"
        )
