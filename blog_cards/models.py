"""Data models used throughout the card pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class Article:
    """A blog article stored as a front matter + body file."""

    slug: str
    path: Path


@dataclass
class CardOutcome:
    """What happened to a single article during a batch run."""

    slug: str
    skipped: bool = False
    generated: bool = False
    updated: bool = False
    card_path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class BatchResult:
    """Summary of a whole batch run."""

    outcomes: List[CardOutcome] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def generated(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.generated)

    @property
    def skipped(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.skipped)

    @property
    def updated(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.updated)

    @property
    def failed(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.failed)
