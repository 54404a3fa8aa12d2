from __future__ import annotations

from collections.abc import Sequence

from ..models.fortune import Fortune
from .selector import NO_SELECTION, DrawSelector

"""Board state for one drawing session.

Owns the current index only; the fortune sequence itself is never mutated.
"""

__all__ = [
    "OmikujiBoard",
]


class OmikujiBoard:
    """Current draw, re-draw and clear for a fixed fortune sequence.

    The first fortune is picked at random on construction (NO_SELECTION when
    the sequence is empty). ``is_saving`` is toggled by the image export while
    an export is running.
    """

    def __init__(self, fortunes: Sequence[Fortune], selector: DrawSelector | None = None) -> None:
        self.fortunes: tuple[Fortune, ...] = tuple(fortunes)
        self.selector = selector if selector is not None else DrawSelector()
        self.current_index = self.selector.first(len(self.fortunes))
        self.is_saving = False

    @property
    def can_draw(self) -> bool:
        return len(self.fortunes) > 0

    @property
    def active(self) -> Fortune | None:
        if self.current_index < 0 or self.current_index >= len(self.fortunes):
            return None
        return self.fortunes[self.current_index]

    def draw(self) -> Fortune | None:
        """Select a different fortune; no-op on an empty board."""
        if not self.can_draw:
            return None
        self.current_index = self.selector.next(len(self.fortunes), self.current_index)
        return self.active

    def clear(self) -> None:
        self.current_index = NO_SELECTION

    @property
    def detail_text(self) -> str:
        fortune = self.active
        if fortune is None or not fortune.details:
            return ""
        return "\n".join(fortune.details)
