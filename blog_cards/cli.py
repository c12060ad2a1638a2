"""Command-line entry point for the card generator."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import Sequence

from playwright.async_api import Error as PlaywrightError

from .config import (
    DEFAULT_BASE_URL,
    DEFAULT_CONTENT_ROOT,
    DEFAULT_OUTPUT_ROOT,
    DEFAULT_PUBLIC_PREFIX,
    IMAGE_TYPES,
    CardConfig,
)
from .pipeline import generate_cards

logger = logging.getLogger("blog_cards.cli")

BASE_URL_ENV = "BLOG_CARDS_BASE_URL"


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="blog-cards",
        description=(
            "Screenshot locally served blog articles into social share cards "
            "and reference them from each article's front matter."
        ),
    )
    parser.add_argument(
        "--skipImage",
        dest="skip_image",
        action="store_true",
        help="Do not capture any card images",
    )
    parser.add_argument(
        "--skipPostUpdate",
        dest="skip_post_update",
        action="store_true",
        help="Do not rewrite article front matter",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Regenerate cards even when one already exists",
    )
    parser.add_argument(
        "--content-dir",
        type=Path,
        default=DEFAULT_CONTENT_ROOT,
        help=f"Directory holding the articles (default: {DEFAULT_CONTENT_ROOT})",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=DEFAULT_OUTPUT_ROOT,
        help=f"Directory where cards are written (default: {DEFAULT_OUTPUT_ROOT})",
    )
    parser.add_argument(
        "--public-prefix",
        default=DEFAULT_PUBLIC_PREFIX,
        help=f"URL path the output directory is served under (default: {DEFAULT_PUBLIC_PREFIX})",
    )
    parser.add_argument(
        "--base-url",
        default=os.getenv(BASE_URL_ENV) or DEFAULT_BASE_URL,
        help=f"Local server rendering the articles (default: ${BASE_URL_ENV} or {DEFAULT_BASE_URL})",
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        default=4,
        help="Maximum number of pages open at once",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Navigation and network idle timeout in seconds",
    )
    parser.add_argument(
        "--image-type",
        choices=IMAGE_TYPES,
        default="png",
        help="Card image format (default: png)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> CardConfig:
    return CardConfig(
        content_root=args.content_dir,
        output_root=args.output_dir,
        public_prefix=args.public_prefix,
        base_url=args.base_url,
        image_type=args.image_type,
        navigation_timeout=args.timeout,
        max_concurrent=args.concurrency,
        force=args.force,
        skip_image=args.skip_image,
        skip_post_update=args.skip_post_update,
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    try:
        config = build_config(args)
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    try:
        result = asyncio.run(generate_cards(config))
    except PlaywrightError as exc:
        logger.error("Browser automation failed: %s", exc)
        return 1
    except OSError as exc:
        logger.error("Run aborted by operating system error: %s", exc)
        return 1

    logger.info(
        "Finished in %.2fs (%d generated, %d skipped, %d updated, %d failed)",
        result.elapsed_seconds,
        result.generated,
        result.skipped,
        result.updated,
        result.failed,
    )
    for outcome in result.outcomes:
        if outcome.failed:
            logger.debug("%s -> %s", outcome.slug, outcome.error)
        elif outcome.card_path is not None:
            logger.debug("%s -> %s", outcome.slug, outcome.card_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
