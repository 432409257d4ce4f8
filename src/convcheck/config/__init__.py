"""Configuration loading, schema, and defaults."""

from convcheck.config.loader import ConfigError, load_config
from convcheck.config.schema import ConvCheckConfig

__all__ = [
    "ConfigError",
    "ConvCheckConfig",
    "load_config",
]
