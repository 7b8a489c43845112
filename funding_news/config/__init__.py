"""
Configuration module for headline sources.

Provides:
- JSON/YAML config loading with validation
- Environment variable substitution
- Loading the document from a URL
"""

from .loader import (
    ConfigError,
    ConfigLoader,
    HeadlinesConfig,
    load_config,
    load_config_from_url,
)

__all__ = [
    "ConfigError",
    "ConfigLoader",
    "HeadlinesConfig",
    "load_config",
    "load_config_from_url",
]
