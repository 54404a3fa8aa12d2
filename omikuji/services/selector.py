from __future__ import annotations

import random

"""Draw selection: pick a fortune index different from the one on display."""

__all__ = [
    "NO_SELECTION",
    "DrawSelector",
    "initial_index",
    "next_index",
]

NO_SELECTION = -1  # 何も表示していない状態


def initial_index(length: int, rng: random.Random | None = None) -> int:
    """Uniform pick for the very first draw; NO_SELECTION when empty."""
    if length <= 0:
        return NO_SELECTION
    source = random if rng is None else rng
    return source.randrange(length)


def next_index(length: int, exclude: int, rng: random.Random | None = None) -> int:
    """Random index in [0, length) that differs from ``exclude``.

    Rejection sampling keeps the result uniform over the remaining
    ``length - 1`` indices. With ``length <= 1`` there is no alternative and
    0 is returned.
    """
    if length <= 1:
        return 0
    source = random if rng is None else rng
    candidate = exclude
    while candidate == exclude:
        candidate = source.randrange(length)
    return candidate


class DrawSelector:
    """Seedable wrapper over initial_index / next_index."""

    def __init__(self, seed: int | None = None, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random(seed)

    def first(self, length: int) -> int:
        return initial_index(length, self._rng)

    def next(self, length: int, exclude: int) -> int:
        return next_index(length, exclude, self._rng)
