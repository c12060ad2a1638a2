"""Shared fixtures: a temporary blog layout and an in-memory Playwright stand-in."""

import asyncio
import struct
import zlib
from pathlib import Path

import pytest

from blog_cards.config import CardConfig


def make_png(width: int = 1, height: int = 1) -> bytes:
    """Build a valid, tiny RGB PNG."""

    def chunk(kind: bytes, data: bytes) -> bytes:
        crc = zlib.crc32(kind + data) & 0xFFFFFFFF
        return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", crc)

    header = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    rows = b"".join(b"\x00" + b"\x00\x00\x00" * width for _ in range(height))
    return (
        b"\x89PNG\r\n\x1a\n"
        + chunk(b"IHDR", header)
        + chunk(b"IDAT", zlib.compress(rows))
        + chunk(b"IEND", b"")
    )


PNG_BYTES = make_png()


class FakeResponse:
    def __init__(self, status: int = 200):
        self.status = status


class FakeElement:
    """Element handle that records the scripts evaluated against it."""

    def __init__(self, selector: str):
        self.selector = selector
        self.scripts = []

    async def evaluate(self, script):
        self.scripts.append(script)

    @property
    def hidden(self) -> bool:
        return any("visibility = 'hidden'" in script for script in self.scripts)


class FakePage:
    """Page double driven by the per-slug behaviour configured on FakeBrowser."""

    def __init__(self, browser: "FakeBrowser", options: dict):
        self.browser = browser
        self.options = options
        self.url = None
        self.closed = False
        self.load_states = []
        self.timeouts = []
        self.screenshots = []
        self.elements = {}
        self.default_timeout = None
        self.default_navigation_timeout = None

    @property
    def slug(self) -> str:
        return self.url.rstrip("/").rsplit("/", 1)[-1]

    def set_default_timeout(self, timeout):
        self.default_timeout = timeout

    def set_default_navigation_timeout(self, timeout):
        self.default_navigation_timeout = timeout

    async def goto(self, url):
        self.url = url
        self.browser.visited.append(url)
        await asyncio.sleep(0)
        error = self.browser.goto_errors.get(self.slug)
        if error is not None:
            raise error
        return FakeResponse(self.browser.statuses.get(self.slug, 200))

    async def wait_for_load_state(self, state):
        self.load_states.append(state)

    async def query_selector(self, selector):
        if selector in self.browser.missing.get(self.slug, set()):
            return None
        return self.elements.setdefault(selector, FakeElement(selector))

    async def wait_for_timeout(self, timeout):
        self.timeouts.append(timeout)
        await asyncio.sleep(0)

    async def screenshot(self, **kwargs):
        self.screenshots.append(kwargs)
        return self.browser.screenshot_bytes

    async def close(self):
        self.closed = True
        self.browser.open_pages -= 1


class FakeBrowser:
    """Tracks pages so tests can assert on navigation, capture and cleanup."""

    def __init__(self, screenshot_bytes: bytes = PNG_BYTES):
        self.screenshot_bytes = screenshot_bytes
        self.pages = []
        self.visited = []
        self.missing = {}
        self.goto_errors = {}
        self.statuses = {}
        self.open_pages = 0
        self.max_open_pages = 0

    async def new_page(self, **options):
        page = FakePage(self, options)
        self.pages.append(page)
        self.open_pages += 1
        self.max_open_pages = max(self.max_open_pages, self.open_pages)
        return page

    @property
    def screenshot_count(self) -> int:
        return sum(len(page.screenshots) for page in self.pages)


@pytest.fixture
def png_bytes():
    return PNG_BYTES


@pytest.fixture
def fake_browser():
    return FakeBrowser()


@pytest.fixture
def fake_page(fake_browser):
    page = FakePage(fake_browser, {})
    fake_browser.pages.append(page)
    fake_browser.open_pages += 1
    return page


@pytest.fixture
def blog(tmp_path):
    """Blog checkout with an empty content directory and no cards yet."""
    content = tmp_path / "data" / "blog"
    content.mkdir(parents=True)
    return tmp_path


@pytest.fixture
def config(blog):
    return CardConfig(
        content_root=blog / "data" / "blog",
        output_root=blog / "public" / "static" / "blog",
    )


def write_article(config: CardConfig, slug: str, text: str, ext: str = ".md") -> Path:
    path = config.content_root / f"{slug}{ext}"
    path.write_bytes(text.encode("utf-8"))
    return path
