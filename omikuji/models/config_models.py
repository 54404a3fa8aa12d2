from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

"""Config dataclasses for the omikuji app.

These are produced by omikuji.config.loader after YAML parsing and schema
validation. Every key is optional in the YAML file; the defaults below match
the behaviour of the web card (white background, scale capped at 3).
"""

DEFAULT_DATA_PATH = Path("data") / "fortunes.csv"


@dataclass(frozen=True)
class ExportConfig:
    """Image export settings."""
    output_directory: Path = Path("exports")
    background_color: str = "#ffffff"
    device_pixel_ratio: float = 1.0  # >1 で高解像度扱い (scale=2)
    max_scale: float = 3.0
    font_path: str | None = None  # None の場合 Pillow 既定フォント


@dataclass(frozen=True)
class AppConfig:
    """Root configuration object."""
    data_path: Path = DEFAULT_DATA_PATH
    export: ExportConfig = field(default_factory=ExportConfig)
    seed: int | None = None  # 乱数シード (再現用)
