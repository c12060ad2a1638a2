"""Front matter reading and writing for article files."""

from __future__ import annotations

import copy
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml

from .utils import atomic_write_text

logger = logging.getLogger("blog_cards.frontmatter")

IMAGES_FIELD = "images"

_BOM = "\ufeff"
_OPENING_PATTERN = re.compile(r"---[ \t]*(\r?\n)")
_CLOSING_PATTERN = re.compile(r"^(?:---|\.\.\.)[ \t]*(?:\r?\n|\Z)", re.MULTILINE)


class FrontMatterError(ValueError):
    """Raised when an article's metadata block cannot be parsed."""


@dataclass
class FrontMatterDocument:
    """An article split into its metadata mapping and untouched body text."""

    metadata: Dict[str, Any]
    body: str
    header: str = ""
    newline: str = "\n"
    bom: str = ""
    _parsed: Dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def modified(self) -> bool:
        return self.metadata != self._parsed

    def dump(self) -> str:
        """Serialize back to text; unmodified documents come back verbatim."""
        if not self.modified:
            return self.header + self.body
        return self.bom + compose_front_matter(self.metadata, self.newline) + self.body


def parse_document(raw: str) -> FrontMatterDocument:
    """Split raw article text into metadata and body.

    Text without a leading ``---`` block has empty metadata and is all body.
    A leading byte order mark is kept out of the body and written back first.
    """
    bom = _BOM if raw.startswith(_BOM) else ""
    opening = _OPENING_PATTERN.match(raw, len(bom))
    if not opening:
        return FrontMatterDocument(metadata={}, body=raw[len(bom) :], header=bom, bom=bom)

    closing = _CLOSING_PATTERN.search(raw, opening.end())
    if not closing:
        raise FrontMatterError("Front matter block is not terminated")

    yaml_text = raw[opening.end() : closing.start()]
    try:
        metadata = yaml.safe_load(yaml_text) if yaml_text.strip() else {}
    except yaml.YAMLError as exc:
        raise FrontMatterError(f"Invalid YAML front matter: {exc}") from exc
    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise FrontMatterError(
            f"Front matter must be a mapping, got {type(metadata).__name__}"
        )

    return FrontMatterDocument(
        metadata=metadata,
        body=raw[closing.end() :],
        header=raw[: closing.end()],
        newline=opening.group(1),
        bom=bom,
        _parsed=copy.deepcopy(metadata),
    )


def compose_front_matter(metadata: Dict[str, Any], newline: str = "\n") -> str:
    """Render metadata as a ``---`` delimited YAML block."""
    dumped = yaml.safe_dump(
        metadata,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )
    block = f"---\n{dumped}---\n"
    if newline != "\n":
        block = block.replace("\n", newline)
    return block


def ensure_image(metadata: Dict[str, Any], image_url: str) -> bool:
    """Put image_url at the front of the images list unless already listed."""
    images = metadata.get(IMAGES_FIELD)
    if images is None:
        metadata[IMAGES_FIELD] = [image_url]
        return True
    if not isinstance(images, list):
        images = [images]
        metadata[IMAGES_FIELD] = images
    if image_url in images:
        return False
    images.insert(0, image_url)
    return True


def read_document(path: Path) -> FrontMatterDocument:
    # Decode bytes directly so line endings in the body survive untouched.
    return parse_document(path.read_bytes().decode("utf-8"))


def update_article_images(path: Path, image_url: str) -> bool:
    """Reference image_url from the article's front matter.

    Returns ``True`` when the file was rewritten and ``False`` when the image
    was already listed, in which case nothing is written.
    """
    document = read_document(path)
    ensure_image(document.metadata, image_url)
    if not document.modified:
        logger.debug("%s already references %s", path, image_url)
        return False
    atomic_write_text(path, document.dump())
    logger.info("Updated %s with %s", path, image_url)
    return True

