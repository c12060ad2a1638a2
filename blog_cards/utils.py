"""Utility helpers for slugs, delays and file writes."""

from __future__ import annotations

import logging
import os
import random
import shutil
from pathlib import Path
from typing import Optional

logger = logging.getLogger("blog_cards")


def slug_from_path(path: Path) -> str:
    """Strip directory and extension from an article filename."""
    return Path(path).stem


def random_delay_ms(
    minimum: int, maximum: int, rng: Optional[random.Random] = None
) -> int:
    """Pick a delay uniformly from the inclusive range [minimum, maximum]."""
    return (rng or random).randint(minimum, maximum)


def atomic_write_bytes(target: Path, data: bytes) -> None:
    """Write data next to target and swap it in with a single rename."""
    temp_file = target.with_name(f".{target.name}.{os.getpid()}.tmp")
    try:
        temp_file.write_bytes(data)
        if target.exists():
            shutil.copymode(target, temp_file)
        temp_file.replace(target)
    except OSError:
        logger.debug("Removing temporary file %s after failed write", temp_file)
        temp_file.unlink(missing_ok=True)
        raise


def atomic_write_text(target: Path, text: str, encoding: str = "utf-8") -> None:
    atomic_write_bytes(target, text.encode(encoding))
