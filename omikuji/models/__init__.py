"""Domain models for the omikuji fortune draw.

This package contains the record, result, error and configuration dataclasses
shared across the dataset pipeline, the services and the CLI.
"""

from .config_models import AppConfig, ExportConfig
from .error_record import ErrorRecord
from .fortune import Fortune
from .load_result import LoadResult

__all__ = [
    # Configuration models
    "AppConfig",
    "ExportConfig",
    # Dataset models
    "Fortune",
    "LoadResult",
    # Logging
    "ErrorRecord",
]
