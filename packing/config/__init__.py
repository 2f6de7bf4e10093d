"""Configuration loading (YAML + JSON schema)."""

from .loader import ConfigError, PackingConfig, config_from_dict, load_config

__all__ = [
    "ConfigError",
    "PackingConfig",
    "config_from_dict",
    "load_config",
]
