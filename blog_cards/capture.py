"""Rendering an article page and turning it into a card image."""

from __future__ import annotations

import logging
from pathlib import Path

from playwright.async_api import (
    Error as PlaywrightError,
    Page,
    TimeoutError as PlaywrightTimeoutError,
)

from .config import CardConfig
from .images import validate_image
from .inspector import PageInspector, SelectorKind
from .utils import atomic_write_bytes, random_delay_ms

logger = logging.getLogger("blog_cards.capture")

HIDDEN_REGIONS = (SelectorKind.HEADER, SelectorKind.TIMESTAMP, SelectorKind.PROSE)


class NavigationError(RuntimeError):
    """Raised when an article page cannot be loaded."""


async def open_article(page: Page, slug: str, config: CardConfig) -> None:
    """Load the article and wait for the network to go quiet."""
    url = config.article_url(slug)
    timeout_ms = config.navigation_timeout * 1000
    page.set_default_navigation_timeout(timeout_ms)
    page.set_default_timeout(timeout_ms)
    logger.debug("Loading %s", url)
    try:
        response = await page.goto(url)
        await page.wait_for_load_state("networkidle")
    except PlaywrightTimeoutError as exc:
        raise NavigationError(f"Timed out loading {url}: {exc}") from exc
    except PlaywrightError as exc:
        raise NavigationError(f"Could not load {url}: {exc}") from exc
    if response is not None and response.status >= 400:
        raise NavigationError(f"{url} responded with HTTP {response.status}")


async def hide_layout_elements(inspector: PageInspector) -> None:
    """Hide the header, timestamp and prose so every card crops the same way.

    All regions are located before any is touched, so a page missing one of
    them is left as it was.
    """
    handles = [await inspector.find_required(kind) for kind in HIDDEN_REGIONS]
    for handle in handles:
        await inspector.hide(handle)


async def settle(page: Page, config: CardConfig) -> int:
    """Pause for a random interval so transitions finish before capture."""
    delay = random_delay_ms(config.settle_min_ms, config.settle_max_ms)
    logger.debug("Settling for %d ms", delay)
    await page.wait_for_timeout(delay)
    return delay


async def capture_card(page: Page, destination: Path, config: CardConfig) -> Path:
    """Screenshot the clip region and write it to destination."""
    data = await page.screenshot(clip=config.clip.as_dict(), type=config.image_type)
    validate_image(data, config.image_type)
    destination.parent.mkdir(parents=True, exist_ok=True)
    atomic_write_bytes(destination, data)
    return destination


async def render_card(
    page: Page,
    slug: str,
    destination: Path,
    config: CardConfig,
) -> Path:
    """Run every capture step for one article on an already open page."""
    await open_article(page, slug, config)
    await hide_layout_elements(PageInspector(page))
    await settle(page, config)
    return await capture_card(page, destination, config)
