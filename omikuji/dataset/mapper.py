from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..models.fortune import MAX_DETAILS, Fortune

"""Map parsed CSV rows to Fortune records.

Row 0 is the header. Labels are trimmed and lower-cased; the mapping is built
by sequential insertion so a repeated label resolves to its last column.
A header without ``id`` or ``title`` means the dataset is unusable and yields
no records (no exception). Blank rows and rows without id/title are dropped
silently.
"""

__all__ = [
    "REQUIRED_COLUMNS",
    "DETAIL_COLUMNS",
    "MappingStats",
    "build_header_index",
    "cell_value",
    "map_rows",
    "map_fortunes",
]

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("id", "title")
LUCKY_ITEM_COLUMN = "genre1"
LOVE_COLUMN = "genre2"
STUDY_COLUMN = "genre3"
DETAIL_COLUMNS = tuple(f"detail{i}" for i in range(1, MAX_DETAILS + 1))


@dataclass
class MappingStats:
    """Fortunes plus the counters of rows that were dropped."""
    fortunes: list[Fortune] = field(default_factory=list)
    total_rows: int = 0
    blank_rows: int = 0
    invalid_rows: int = 0
    header_valid: bool = True


def build_header_index(header: Sequence[str]) -> dict[str, int]:
    index: dict[str, int] = {}
    for position, label in enumerate(header):
        key = label.strip().lower()
        if key:
            index[key] = position  # 重複ラベルは後勝ち
    return index


def cell_value(cells: Sequence[str], header_index: dict[str, int], key: str) -> str:
    """Trimmed cell for a logical column, or "" when unmapped / out of range."""
    position = header_index.get(key.lower())
    if position is None or position >= len(cells):
        return ""
    return cells[position].strip()


def _is_blank(cells: Sequence[str]) -> bool:
    return all(not cell.strip() for cell in cells)


def _to_fortune(cells: Sequence[str], header_index: dict[str, int]) -> Fortune | None:
    fortune_id = cell_value(cells, header_index, "id")
    title = cell_value(cells, header_index, "title")
    if not fortune_id or not title:
        return None
    details = []
    for key in DETAIL_COLUMNS:
        value = cell_value(cells, header_index, key)
        if value:
            details.append(value)
    return Fortune(
        id=fortune_id,
        title=title,
        lucky_item=cell_value(cells, header_index, LUCKY_ITEM_COLUMN),
        love=cell_value(cells, header_index, LOVE_COLUMN),
        study=cell_value(cells, header_index, STUDY_COLUMN),
        details=tuple(details),
    )


def map_rows(rows: Sequence[Sequence[str]]) -> MappingStats:
    """Map rows to fortunes, keeping counts of skipped rows.

    Args:
        rows: Output of parse_delimited (header first)

    Returns:
        MappingStats with fortunes in source row order
    """
    if not rows:
        return MappingStats()

    header_index = build_header_index(rows[0])
    body = rows[1:]
    missing = [c for c in REQUIRED_COLUMNS if c not in header_index]
    if missing:
        logger.debug(f"header lacks required columns {missing}; dataset treated as empty")
        return MappingStats(total_rows=len(body), header_valid=False)

    stats = MappingStats(total_rows=len(body))
    for offset, cells in enumerate(body, start=2):
        if _is_blank(cells):
            stats.blank_rows += 1
            continue
        fortune = _to_fortune(cells, header_index)
        if fortune is None:
            logger.debug(f"row {offset}: id/title missing, skipped")
            stats.invalid_rows += 1
            continue
        stats.fortunes.append(fortune)
    return stats


def map_fortunes(rows: Sequence[Sequence[str]]) -> list[Fortune]:
    return map_rows(rows).fortunes
