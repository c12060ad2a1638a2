"""Configuration objects and constants for the card generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Tuple

DEFAULT_CONTENT_ROOT = Path("data/blog")
DEFAULT_OUTPUT_ROOT = Path("public/static/blog")
DEFAULT_PUBLIC_PREFIX = "/static/blog"
DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_CARD_BASENAME = "twitter-card"
DEFAULT_EXTENSIONS = (".md", ".mdx")
IMAGE_TYPES = ("png", "jpeg")


@dataclass(frozen=True)
class ClipRegion:
    """Pixel rectangle of the viewport that ends up in the card."""

    x: int = 0
    y: int = 48
    width: int = 800
    height: int = 418

    def as_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass
class CardConfig:
    """Top-level settings that control discovery, capture and metadata updates."""

    content_root: Path = DEFAULT_CONTENT_ROOT
    output_root: Path = DEFAULT_OUTPUT_ROOT
    public_prefix: str = DEFAULT_PUBLIC_PREFIX
    base_url: str = DEFAULT_BASE_URL
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    card_basename: str = DEFAULT_CARD_BASENAME
    image_type: str = "png"
    viewport_width: int = 800
    viewport_height: int = 618
    color_scheme: str = "dark"
    clip: ClipRegion = field(default_factory=ClipRegion)
    settle_min_ms: int = 1000
    settle_max_ms: int = 2000
    navigation_timeout: float = 30.0
    max_concurrent: int = 4
    force: bool = False
    skip_image: bool = False
    skip_post_update: bool = False

    def __post_init__(self) -> None:
        self.content_root = Path(self.content_root)
        self.output_root = Path(self.output_root)
        if self.image_type not in IMAGE_TYPES:
            raise ValueError(
                f"Unsupported image type {self.image_type!r}; expected one of {IMAGE_TYPES}"
            )
        if self.settle_min_ms < 0 or self.settle_min_ms > self.settle_max_ms:
            raise ValueError(
                f"Invalid settle range {self.settle_min_ms}-{self.settle_max_ms} ms"
            )
        if self.max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1")

    @property
    def card_filename(self) -> str:
        """File name of the card inside each slug directory."""
        return f"{self.card_basename}.{self.image_type}"

    @property
    def viewport(self) -> Dict[str, int]:
        return {"width": self.viewport_width, "height": self.viewport_height}

    def article_url(self, slug: str) -> str:
        """URL under which the local server renders the article."""
        return f"{self.base_url.rstrip('/')}/{slug}"
