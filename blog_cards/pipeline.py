"""High-level orchestration of card generation across all articles."""

from __future__ import annotations

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, List, Optional

from playwright.async_api import Browser, async_playwright

from .articles import card_exists, card_path, discover_articles, public_card_path
from .capture import NavigationError, render_card
from .config import CardConfig
from .frontmatter import update_article_images
from .models import Article, BatchResult, CardOutcome

logger = logging.getLogger("blog_cards")


@asynccontextmanager
async def launch_browser() -> AsyncIterator[Browser]:
    """Start headless Chromium for the batch and close it on the way out."""
    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(headless=True)
        try:
            yield browser
        finally:
            await browser.close()


def _relative(path: Path) -> Path:
    try:
        return path.resolve().relative_to(Path.cwd())
    except ValueError:
        return path


async def _generate_image(
    browser: Browser, article: Article, destination: Path, config: CardConfig
) -> None:
    # Color scheme and viewport are page options, so every page gets its own.
    page = await browser.new_page(
        viewport=config.viewport,
        color_scheme=config.color_scheme,
    )
    try:
        await render_card(page, article.slug, destination, config)
    finally:
        await page.close()
    logger.info("Screenshot saved to %s", _relative(destination))


async def process_article(
    article: Article,
    config: CardConfig,
    browser: Optional[Browser],
    outcome: Optional[CardOutcome] = None,
) -> CardOutcome:
    """Generate the card and update front matter for a single article.

    Steps record their progress on outcome as they complete, so a caller
    holding it still sees what was done when a later step raises.
    """
    if outcome is None:
        outcome = CardOutcome(slug=article.slug)
    destination = card_path(config, article.slug)
    if card_exists(config, article.slug) and not config.force:
        logger.debug("Card for %s already exists, skipping", article.slug)
        outcome.skipped = True
        outcome.card_path = destination
        return outcome

    if not config.skip_image:
        if browser is None:
            raise RuntimeError("A browser is required to generate card images")
        await _generate_image(browser, article, destination, config)
        outcome.generated = True
        outcome.card_path = destination

    if not config.skip_post_update:
        outcome.updated = update_article_images(
            article.path, public_card_path(config, article.slug)
        )
    return outcome


async def _process_guarded(
    article: Article,
    config: CardConfig,
    browser: Optional[Browser],
    semaphore: asyncio.Semaphore,
) -> CardOutcome:
    outcome = CardOutcome(slug=article.slug)
    async with semaphore:
        try:
            await process_article(article, config, browser, outcome)
        except NavigationError as exc:
            logger.error("Failed to load article %s: %s", article.slug, exc)
            outcome.error = str(exc)
        except Exception as exc:  # pylint: disable=broad-except
            logger.exception("Failed to process article %s", article.slug)
            outcome.error = f"{type(exc).__name__}: {exc}"
    return outcome


async def run_batch(config: CardConfig, browser: Optional[Browser]) -> BatchResult:
    """Process every discovered article with bounded concurrency.

    Individual article failures are recorded in the result and never stop the
    remaining articles. Discovery errors propagate.
    """
    start = time.perf_counter()
    articles = discover_articles(config)
    logger.info("Found %d article(s) in %s", len(articles), config.content_root)

    semaphore = asyncio.Semaphore(config.max_concurrent)
    tasks = [
        asyncio.create_task(_process_guarded(article, config, browser, semaphore))
        for article in articles
    ]
    outcomes: List[CardOutcome] = list(await asyncio.gather(*tasks))
    return BatchResult(outcomes=outcomes, elapsed_seconds=time.perf_counter() - start)


async def generate_cards(config: CardConfig) -> BatchResult:
    """Own the browser session for a whole run.

    No browser is started when image generation is skipped. A browser that
    fails to launch raises, aborting the run.
    """
    if config.skip_image:
        return await run_batch(config, None)
    async with launch_browser() as browser:
        return await run_batch(config, browser)
