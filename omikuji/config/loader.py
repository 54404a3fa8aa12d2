from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import DEFAULT_DATA_PATH, AppConfig, ExportConfig

"""Config loader.

Responsibilities:
- Load YAML config (config/omikuji.yml by default)
- Validate against the bundled JSON schema (config_schema.json)
- Apply defaults for every missing key
- Apply the OMIKUJI_DATA_PATH environment override
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config") / "omikuji.yml"
DATA_PATH_ENV = "OMIKUJI_DATA_PATH"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing or unreadable, or the data violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _build_config(data: dict[str, Any]) -> AppConfig:
    export_raw = data.get("export") or {}
    defaults = ExportConfig()
    export = ExportConfig(
        output_directory=Path(export_raw.get("output_directory", defaults.output_directory)),
        background_color=export_raw.get("background_color", defaults.background_color),
        device_pixel_ratio=float(export_raw.get("device_pixel_ratio", defaults.device_pixel_ratio)),
        max_scale=float(export_raw.get("max_scale", defaults.max_scale)),
        font_path=export_raw.get("font_path", defaults.font_path),
    )
    return AppConfig(
        data_path=Path(data.get("data_path", DEFAULT_DATA_PATH)),
        export=export,
        seed=data.get("seed"),
    )


def _apply_env_overrides(cfg: AppConfig) -> AppConfig:
    override = os.getenv(DATA_PATH_ENV)
    if not override:
        return cfg
    return AppConfig(data_path=Path(override), export=cfg.export, seed=cfg.seed)


def load_config(path: Path) -> AppConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)
    return _apply_env_overrides(_build_config(data))


def resolve_config(path: Path | None = None) -> AppConfig:
    """Load an explicit config path, else the default one if present, else defaults.

    An explicitly given path that does not exist is a ConfigError.
    """
    if path is not None:
        return load_config(path)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return _apply_env_overrides(AppConfig())
