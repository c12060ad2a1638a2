"""Article discovery and the deterministic card locations derived from slugs."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from .config import CardConfig
from .models import Article
from .utils import slug_from_path

logger = logging.getLogger("blog_cards.articles")


def discover_articles(config: CardConfig) -> List[Article]:
    """Return every article in the content root, ordered by filename.

    Raises ``OSError`` when the content root is missing or unreadable. An
    existing but empty directory yields an empty list.
    """
    extensions = {ext.lower() for ext in config.extensions}
    articles: List[Article] = []
    seen = set()
    for entry in sorted(config.content_root.iterdir(), key=lambda p: p.name):
        if not entry.is_file() or entry.suffix.lower() not in extensions:
            continue
        slug = slug_from_path(entry)
        if slug in seen:
            logger.warning("Ignoring %s: slug %s already taken", entry, slug)
            continue
        seen.add(slug)
        articles.append(Article(slug=slug, path=entry))
    logger.debug("Discovered %d article(s) in %s", len(articles), config.content_root)
    return articles


def list_slugs(config: CardConfig) -> List[str]:
    return [article.slug for article in discover_articles(config)]


def card_path(config: CardConfig, slug: str) -> Path:
    """Location on disk of the canonical card for a slug."""
    return config.output_root / slug / config.card_filename


def public_card_path(config: CardConfig, slug: str) -> str:
    """Path under which the site serves the card, as stored in front matter."""
    return f"{config.public_prefix.rstrip('/')}/{slug}/{config.card_filename}"


def card_exists(config: CardConfig, slug: str) -> bool:
    # Advisory only: nothing stops a concurrent run from writing the same file.
    return card_path(config, slug).exists()
