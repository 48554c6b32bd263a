"""Configuration module for modelsetup."""

from .loader import (
    ConfigError,
    ConfigPaths,
    default_config_file,
    get_config_paths,
    load_config,
    save_config,
)

__all__ = [
    "ConfigError",
    "ConfigPaths",
    "default_config_file",
    "get_config_paths",
    "load_config",
    "save_config",
]
