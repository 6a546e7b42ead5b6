"""Configuration management."""

from .loader import Config, load_config, load_sources, save_config, save_sources
from .models import (
    ConfigModel,
    FetchConfig,
    MatchingConfig,
    PostgresConfig,
    SnapshotConfig,
    SourceConfig,
)

__all__ = [
    "Config",
    "ConfigModel",
    "FetchConfig",
    "MatchingConfig",
    "PostgresConfig",
    "SnapshotConfig",
    "SourceConfig",
    "load_config",
    "load_sources",
    "save_config",
    "save_sources",
]
