from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from ..models.fortune import Fortune
from ..services.board import OmikujiBoard
from ..services.card import PAD, CardLayout, build_card, render_card_text

"""Card image export.

export_card() takes the board's active fortune, asks a renderer for a raster
image at the given scale and writes it as PNG. The renderer is any callable
``(CardLayout, scale) -> PIL.Image.Image``; PillowCardRenderer is the default
and draws the vertical card text on a plain background. Without an explicit
font_path it uses the first installed CJK font from CJK_FONT_PATHS, and only
falls back to the Pillow default font (no kana/kanji glyphs) when none exists.

File name: ``omikuji-{id}-{YYYYMMDDTHHMMSS}.png`` (``omikuji-{timestamp}.png``
when the id is empty).
"""

__all__ = [
    "ExportError",
    "CardRenderer",
    "PillowCardRenderer",
    "export_scale",
    "export_timestamp",
    "export_filename",
    "export_card",
    "find_cjk_font",
    "CJK_FONT_PATHS",
]

CardRenderer = Callable[[CardLayout, float], Image.Image]

BASE_FONT_SIZE = 24
INK_COLOR = "#1a1a1a"

# 日本語グリフを持つフォント (見つからない場合のみ Pillow 既定フォント)
CJK_FONT_PATHS = (
    "/usr/share/fonts/opentype/noto/NotoSansCJK-Regular.ttc",
    "/usr/share/fonts/noto-cjk/NotoSansCJK-Regular.ttc",
    "/usr/share/fonts/google-noto-cjk/NotoSansCJK-Regular.ttc",
    "/usr/share/fonts/opentype/noto/NotoSerifCJK-Regular.ttc",
    "/usr/share/fonts/truetype/noto/NotoSansJP-Regular.ttf",
    "/usr/share/fonts/opentype/ipafont-gothic/ipag.ttf",
    "/usr/share/fonts/truetype/fonts-japanese-gothic.ttf",
    "/usr/share/fonts/truetype/takao-gothic/TakaoGothic.ttf",
    "/System/Library/Fonts/ヒラギノ角ゴシック W3.ttc",
    "/System/Library/Fonts/Hiragino Sans GB.ttc",
    "/Library/Fonts/Arial Unicode.ttf",
    "C:/Windows/Fonts/meiryo.ttc",
    "C:/Windows/Fonts/msgothic.ttc",
    "C:/Windows/Fonts/YuGothM.ttc",
)


def find_cjk_font(candidates: Sequence[str] = CJK_FONT_PATHS) -> str | None:
    """First existing font path from ``candidates``, or None."""
    for path in candidates:
        if os.path.exists(path):
            return path
    return None


class ExportError(Exception):
    """Raised when rendering or writing the card image fails."""


def export_scale(device_pixel_ratio: float, max_scale: float = 3.0) -> float:
    """2x on high density displays, 1.5x otherwise, capped at ``max_scale``."""
    return min(max_scale, 2.0 if device_pixel_ratio > 1 else 1.5)


def export_timestamp(now: datetime | None = None) -> str:
    # ISO8601 から区切りと秒未満を除いた形 (例: 20261019T093000)
    moment = now if now is not None else datetime.now(UTC)
    return moment.strftime("%Y%m%dT%H%M%S")


def export_filename(fortune: Fortune, now: datetime | None = None) -> str:
    base = f"omikuji-{fortune.id}" if fortune.id else "omikuji"
    return f"{base}-{export_timestamp(now)}.png"


class PillowCardRenderer:
    """Draws render_card_text() output on a grid, one glyph per cell."""

    def __init__(
        self,
        font_path: str | None = None,
        background_color: str = "#ffffff",
        font_size: int = BASE_FONT_SIZE,
    ) -> None:
        self.font_path = font_path
        self.background_color = background_color
        self.font_size = font_size

    def _load_font(self, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        if self.font_path:
            return ImageFont.truetype(self.font_path, size)
        fallback = find_cjk_font()
        if fallback is not None:
            return ImageFont.truetype(fallback, size)
        return ImageFont.load_default(size=size)

    def __call__(self, card: CardLayout, scale: float) -> Image.Image:
        rows = render_card_text(card).split("\n")
        cell = max(1, round(self.font_size * scale))
        margin = cell
        columns = max(len(row) for row in rows)
        size = (columns * cell + 2 * margin, len(rows) * cell + 2 * margin)

        img = Image.new("RGB", size, self.background_color)
        draw = ImageDraw.Draw(img)
        font = self._load_font(cell)
        for r, row in enumerate(rows):
            for c, char in enumerate(row):
                if char == PAD:
                    continue
                draw.text((margin + c * cell, margin + r * cell), char, fill=INK_COLOR, font=font)
        return img


def export_card(
    board: OmikujiBoard,
    output_directory: Path,
    *,
    scale: float,
    renderer: CardRenderer | None = None,
    now: datetime | None = None,
) -> Path | None:
    """Export the active card as PNG.

    Returns:
        Written file path, or None when no fortune is active

    Raises:
        ExportError: renderer or file write failed (``board.is_saving`` is reset either way)
    """
    fortune = board.active
    if fortune is None:
        return None

    render = renderer if renderer is not None else PillowCardRenderer()
    board.is_saving = True
    try:
        image = render(build_card(fortune), scale)
        output_directory.mkdir(parents=True, exist_ok=True)
        path = output_directory / export_filename(fortune, now)
        image.save(path, format="PNG")
        return path
    except Exception as e:
        raise ExportError(f"failed to export card '{fortune.id}': {e}") from e
    finally:
        board.is_saving = False
