from __future__ import annotations

from dataclasses import dataclass, field

from .fortune import Fortune

"""Load result model for the fortune dataset pipeline.

Aggregates the mapped fortunes together with the counters used by the
SUMMARY output line.
"""


@dataclass(frozen=True)
class LoadResult:
    """Outcome of provider -> parser -> mapper.

    ``found`` is False when the provider reported the dataset as absent; this is
    a valid "no data" state, not a failure.
    """
    source: str  # ファイルパス等の表示名
    found: bool
    fortunes: tuple[Fortune, ...] = field(default_factory=tuple)
    total_rows: int = 0  # ヘッダを除くデータ行数
    blank_rows: int = 0  # 全セル空のためスキップした行
    invalid_rows: int = 0  # id / title 欠落で破棄した行
    header_valid: bool = True  # id / title 列がヘッダに存在したか

    @property
    def is_empty(self) -> bool:
        return not self.fortunes
