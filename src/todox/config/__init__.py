"""Configuration loading, schema, and defaults."""

from todox.config.loader import ConfigError, load_config, validate_config
from todox.config.schema import DEFAULT_TAGS, TodoxConfig, tag_severity

__all__ = [
    "ConfigError",
    "DEFAULT_TAGS",
    "TodoxConfig",
    "load_config",
    "tag_severity",
    "validate_config",
]
