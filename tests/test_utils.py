"""Tests for file and delay helpers."""

import random
import stat
from pathlib import Path

from blog_cards.utils import atomic_write_bytes, atomic_write_text, random_delay_ms, slug_from_path


def test_slug_from_path():
    assert slug_from_path(Path("data/blog/my-post.md")) == "my-post"


def test_random_delay_is_inclusive():
    rng = random.Random(7)
    delays = {random_delay_ms(1, 3, rng) for _ in range(200)}

    assert delays == {1, 2, 3}


def test_atomic_write_creates_file(tmp_path):
    target = tmp_path / "card.png"

    atomic_write_bytes(target, b"data")

    assert target.read_bytes() == b"data"
    assert [p.name for p in tmp_path.iterdir()] == ["card.png"]


def test_atomic_write_keeps_permissions(tmp_path):
    target = tmp_path / "post.md"
    target.write_text("old", encoding="utf-8")
    target.chmod(0o640)

    atomic_write_text(target, "new")

    assert target.read_text(encoding="utf-8") == "new"
    assert stat.S_IMODE(target.stat().st_mode) == 0o640
