from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from ..models.fortune import Fortune
from ..models.load_result import LoadResult
from .mapper import map_rows
from .parser import parse_delimited

"""Fortune dataset loading (provider -> parser -> mapper).

A provider returns the raw CSV text, or None when the dataset does not exist.
Absent data is the same as an empty dataset. Any other read failure (OSError)
and MalformedInputError from the parser propagate to the caller unchanged;
no partial dataset is returned in that case.
"""

__all__ = [
    "FortuneProvider",
    "FileFortuneProvider",
    "TextFortuneProvider",
    "load_dataset",
    "load_fortunes",
]

logger = logging.getLogger(__name__)


class FortuneProvider(Protocol):
    source: str

    def read_text(self) -> str | None:
        ...


@dataclass(frozen=True)
class FileFortuneProvider:
    """Reads the dataset from a UTF-8 file (BOM tolerated)."""
    path: Path
    encoding: str = "utf-8-sig"

    @property
    def source(self) -> str:
        return str(self.path)

    def read_text(self) -> str | None:
        try:
            return Path(self.path).read_text(encoding=self.encoding)
        except FileNotFoundError:
            logger.debug(f"dataset not found: {self.path}")
            return None


@dataclass(frozen=True)
class TextFortuneProvider:
    """In-memory provider; ``text=None`` behaves like a missing file."""
    text: str | None
    source: str = "<memory>"

    def read_text(self) -> str | None:
        return self.text


def load_dataset(provider: FortuneProvider) -> LoadResult:
    """Run the whole ingestion pipeline and return fortunes with counters.

    Raises:
        MalformedInputError: unterminated quoted field in the source text
        OSError: read failure other than file-not-found
    """
    raw = provider.read_text()
    if raw is None:
        return LoadResult(source=provider.source, found=False)

    stats = map_rows(parse_delimited(raw))
    return LoadResult(
        source=provider.source,
        found=True,
        fortunes=tuple(stats.fortunes),
        total_rows=stats.total_rows,
        blank_rows=stats.blank_rows,
        invalid_rows=stats.invalid_rows,
        header_valid=stats.header_valid,
    )


def load_fortunes(provider: FortuneProvider) -> list[Fortune]:
    """Ordered fortune list for the view layer (possibly empty)."""
    return list(load_dataset(provider).fortunes)
