from __future__ import annotations

from dataclasses import dataclass, field

"""Fortune domain model.

One drawable omikuji record. Category values (lucky item / love / study) are
kept raw; display formatting happens in services.formatter.
"""

__all__ = [
    "Fortune",
    "MAX_DETAILS",
]

MAX_DETAILS = 5


@dataclass(frozen=True)
class Fortune:
    """A single fortune record mapped from one CSV data row.

    Only constructed when both ``id`` and ``title`` are non-empty after trimming;
    rows that fail this check are dropped by the mapper.
    """
    id: str
    title: str
    lucky_item: str = ""  # genre1
    love: str = ""  # genre2
    study: str = ""  # genre3
    details: tuple[str, ...] = field(default_factory=tuple)  # detail1..detail5, 空欄は詰める
