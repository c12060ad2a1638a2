"""DOM lookups the card capture depends on, behind a small interface."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Mapping, Optional

from playwright.async_api import ElementHandle, Page


class SelectorKind(str, Enum):
    """Page regions that must be present on every article page."""

    HEADER = "header"
    TIMESTAMP = "timestamp"
    PROSE = "prose"


DEFAULT_SELECTORS: Dict[SelectorKind, str] = {
    SelectorKind.HEADER: "header",
    SelectorKind.TIMESTAMP: "time",
    SelectorKind.PROSE: ".prose",
}

_HIDE_SCRIPT = "node => { node.style.visibility = 'hidden'; }"


class ElementNotFoundError(LookupError):
    """Raised when a required page region is missing from the DOM."""

    def __init__(self, kind: SelectorKind, selector: str) -> None:
        super().__init__(f"Required {kind.value} element not found ({selector!r})")
        self.kind = kind
        self.selector = selector


class PageInspector:
    """Find and restyle required elements on a rendered article page."""

    def __init__(
        self,
        page: Page,
        selectors: Optional[Mapping[SelectorKind, str]] = None,
    ) -> None:
        self.page = page
        self.selectors = dict(DEFAULT_SELECTORS)
        if selectors:
            self.selectors.update(selectors)

    async def find_required(self, kind: SelectorKind) -> ElementHandle:
        selector = self.selectors[kind]
        handle = await self.page.query_selector(selector)
        if handle is None:
            raise ElementNotFoundError(kind, selector)
        return handle

    async def hide(self, handle: ElementHandle) -> None:
        """Make an element invisible while it keeps occupying layout space."""
        await handle.evaluate(_HIDE_SCRIPT)
