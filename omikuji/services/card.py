from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..models.fortune import Fortune
from .formatter import format_category, split_lines

"""Card composition and vertical (top-to-bottom, right-to-left) text rendering.

Card layout, top to bottom:
1. title
2. category columns, left to right: study / love / lucky item
   (each column: label lines then value lines, first line on the right)
3. detail lines

Text is laid out on a grid of one character per cell and padded with the
ideographic space so full-width characters stay aligned.
"""

__all__ = [
    "STUDY_LABEL",
    "LOVE_LABEL",
    "LUCKY_ITEM_LABEL",
    "CategoryColumn",
    "CardLayout",
    "build_card",
    "vertical_block",
    "hstack",
    "render_card_text",
]

STUDY_LABEL = "勉学"
LOVE_LABEL = "恋愛"
LUCKY_ITEM_LABEL = "ラッキー\nアイテム"
TIGHT_TITLES = frozenset({"吉", "凶"})

PAD = "　"


@dataclass(frozen=True)
class CategoryColumn:
    label: str
    value: str
    force_two_lines: bool = False

    @property
    def formatted(self) -> str:
        return format_category(self.value, self.force_two_lines)

    @property
    def lines(self) -> list[str]:
        return split_lines(self.label) + split_lines(self.formatted)


@dataclass(frozen=True)
class CardLayout:
    fortune_id: str
    title: str
    columns: tuple[CategoryColumn, ...]
    details: tuple[str, ...] = ()

    @property
    def tighten_title(self) -> bool:
        # 一文字タイトルは字間を詰める
        return self.title.strip() in TIGHT_TITLES


def build_card(fortune: Fortune) -> CardLayout:
    return CardLayout(
        fortune_id=fortune.id,
        title=fortune.title,
        columns=(
            CategoryColumn(STUDY_LABEL, fortune.study),
            CategoryColumn(LOVE_LABEL, fortune.love),
            CategoryColumn(LUCKY_ITEM_LABEL, fortune.lucky_item, force_two_lines=True),
        ),
        details=fortune.details,
    )


def vertical_block(lines: Sequence[str]) -> list[str]:
    """Lay lines out as vertical columns, first line rightmost.

    Returns the grid as rows; every row has ``len(lines)`` characters.
    """
    if not lines:
        return []
    height = max(len(line) for line in lines)
    columns = [line.ljust(height, PAD) for line in reversed(lines)]
    return ["".join(column[row] for column in columns) for row in range(height)]


def hstack(blocks: Sequence[list[str]], gap: int = 1) -> list[str]:
    """Place blocks side by side (left to right), top aligned."""
    blocks = [b for b in blocks if b]
    if not blocks:
        return []
    height = max(len(b) for b in blocks)
    widths = [len(b[0]) for b in blocks]
    rows = []
    for r in range(height):
        cells = [b[r] if r < len(b) else PAD * w for b, w in zip(blocks, widths)]
        rows.append((PAD * gap).join(cells))
    return rows


def _center(rows: list[str], width: int) -> list[str]:
    centered = []
    for row in rows:
        left = (width - len(row)) // 2
        centered.append(PAD * left + row + PAD * (width - len(row) - left))
    return centered


def render_card_text(card: CardLayout) -> str:
    """Render a card as vertical text, sections separated by an empty row."""
    sections = [
        vertical_block(split_lines(card.title)),
        hstack([vertical_block(column.lines) for column in card.columns]),
        vertical_block(split_lines("\n".join(card.details))),
    ]
    sections = [s for s in sections if s]
    width = max(len(s[0]) for s in sections)
    out: list[str] = []
    for section in sections:
        if out:
            out.append(PAD * width)
        out.extend(_center(section, width))
    return "\n".join(out)
