"""Configuration for crate-digest."""

from settings.config import (
    ConfigError,
    DigestConfig,
    default_config_path,
    load_config,
    write_default_config,
)

__all__ = [
    "ConfigError",
    "DigestConfig",
    "default_config_path",
    "load_config",
    "write_default_config",
]
