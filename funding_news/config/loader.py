"""
Configuration loader for headline sources.

Loads the sources document (JSON or YAML) with:
- Environment variable substitution
- Validation into a HeadlinesConfig
- Default values
"""

import json
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import structlog
import yaml

from funding_news.core.dates import resolve_zone
from funding_news.core.http_client import HttpClient
from funding_news.core.models import SourceSpec

logger = structlog.get_logger(__name__)


DEFAULT_FILENAME = "sources.json"


class ConfigError(ValueError):
    """Raised when the configuration document is missing or invalid."""


def substitute_env_vars(text: str) -> str:
    """
    Substitute environment variables in text.

    Supports formats:
    - ${VAR_NAME} - replaced by empty string (with a warning) if missing
    - ${VAR_NAME:-default} - optional with default

    Args:
        text: Text with env var placeholders

    Returns:
        Text with substituted values
    """
    def replace(match):
        var_expr = match.group(1)
        if ":-" in var_expr:
            var_name, default = var_expr.split(":-", 1)
            return os.getenv(var_name, default)
        value = os.getenv(var_expr)
        if value is None:
            logger.warning("env_var_not_set", var=var_expr)
            return ""
        return value

    return re.sub(r"\$\{([^}]+)\}", replace, text)


def _non_negative_int(value, name: str, default: int) -> int:
    if value is None:
        return default
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from e
    if number < 0:
        raise ConfigError(f"{name} must not be negative, got {number}")
    return number


@dataclass
class HeadlinesConfig:
    """Resolved pipeline configuration."""

    timezone: str = "UTC"
    max_age_days: int = 3
    regions: Optional[list[str]] = None
    sources: list[SourceSpec] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "HeadlinesConfig":
        """
        Build a config from the parsed document.

        Raises:
            ConfigError: On an unknown timezone or invalid numbers
        """
        if not isinstance(data, dict):
            raise ConfigError("Configuration document must be an object")

        timezone = data.get("timezone") or "UTC"
        try:
            resolve_zone(timezone)
        except ValueError as e:
            raise ConfigError(str(e)) from e

        news = data.get("news") or {}
        per_source = _non_negative_int(news.get("perSource"), "news.perSource", 10)

        return cls(
            timezone=timezone,
            max_age_days=_non_negative_int(data.get("maxAgeDays"), "maxAgeDays", 3),
            regions=_parse_regions(data.get("regions")),
            sources=_parse_sources(news.get("sources") or [], per_source),
        )


def _parse_regions(raw) -> Optional[list[str]]:
    """Lower-case region terms; None when nothing usable is configured."""
    if not isinstance(raw, list):
        return None
    regions = [str(r).strip().lower() for r in raw if str(r).strip()]
    return regions or None


def _parse_sources(raw: list, cap: int) -> list[SourceSpec]:
    sources = []
    for entry in raw:
        if isinstance(entry, str):
            url = entry
        elif isinstance(entry, dict):
            url = entry.get("url")
        else:
            url = None

        if not url or not isinstance(url, str) or not url.strip():
            logger.warning("source_load_failed", source=entry, error="missing url")
            continue
        sources.append(SourceSpec(url=url.strip(), cap=cap))
    return sources


class ConfigLoader:
    """
    Configuration loader for headline sources.

    Reads JSON (or YAML) config files from a directory.
    """

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize config loader.

        Args:
            config_dir: Directory containing config files
                       (defaults to package config directory)
        """
        if config_dir:
            self.config_dir = Path(config_dir)
        else:
            self.config_dir = Path(__file__).parent

    def load_file(self, filename: str = DEFAULT_FILENAME) -> dict:
        """
        Load a config document.

        Args:
            filename: Config file name (relative to config_dir)

        Returns:
            Parsed config dict
        """
        filepath = self.config_dir / filename

        if not filepath.exists():
            raise ConfigError(f"Config file not found: {filepath}")

        logger.info("loading_config", file=str(filepath))

        with open(filepath, "r", encoding="utf-8") as f:
            content = substitute_env_vars(f.read())

        return parse_document(content, filepath.suffix)

    def load(self, filename: str = DEFAULT_FILENAME) -> HeadlinesConfig:
        """Load and validate a config file."""
        config = HeadlinesConfig.from_dict(self.load_file(filename))
        logger.info(
            "config_loaded",
            sources=len(config.sources),
            timezone=config.timezone,
            max_age_days=config.max_age_days,
        )
        return config


def parse_document(content: str, suffix: str = ".json") -> dict:
    """Parse JSON, or YAML for .yml/.yaml documents."""
    try:
        if suffix.lower() in (".yml", ".yaml"):
            data = yaml.safe_load(content)
        else:
            data = json.loads(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Could not parse configuration: {e}") from e
    return data or {}


def load_config(config_path: Optional[str] = None) -> HeadlinesConfig:
    """
    Convenience function to load the config.

    Args:
        config_path: Optional path to the config file

    Returns:
        HeadlinesConfig
    """
    if config_path:
        path = Path(config_path)
        return ConfigLoader(str(path.parent)).load(path.name)
    return ConfigLoader().load()


async def load_config_from_url(url: str, http_client: HttpClient) -> HeadlinesConfig:
    """
    Fetch the config document over HTTP.

    Args:
        url: URL of the JSON (or YAML) document
        http_client: Entered HTTP client

    Returns:
        HeadlinesConfig
    """
    logger.info("loading_config", url=url)
    try:
        text = await http_client.get_text(url, headers={"Accept": "application/json"})
    except Exception as e:
        raise ConfigError(f"Could not load configuration from {url}: {e}") from e

    suffix = Path(url.split("?", 1)[0]).suffix
    return HeadlinesConfig.from_dict(parse_document(substitute_env_vars(text), suffix))
