"""
Configuration loader.

Loads configuration from:
1. Default values (built-in)
2. TOML config file (chartcore.toml or ~/.config/chartcore/config.toml)
3. Environment variables

Priority: env vars > config file > defaults
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .schema import ChartCoreConfig

logger = logging.getLogger(__name__)

# Config file search paths (in priority order)
CONFIG_PATHS = [
    Path("chartcore.toml"),                          # Current directory
    Path(".chartcore.toml"),                         # Hidden in current directory
    Path.home() / ".config" / "chartcore" / "config.toml",  # User config
    Path("/etc/chartcore/config.toml"),              # System config
]

# Environment variable prefix
ENV_PREFIX = "CHARTCORE_"


class ConfigError(Exception):
    """Configuration error with helpful message."""

    def __init__(self, message: str, source: str | None = None, field: str | None = None):
        self.source = source
        self.field = field
        super().__init__(message)

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.source:
            parts.append(f"Source: {self.source}")
        if self.field:
            parts.append(f"Field: {self.field}")
        return " | ".join(parts)


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load TOML file if it exists."""
    if not path.exists():
        return {}

    try:
        import tomllib
    except ImportError:
        # Python < 3.11 fallback
        import tomli as tomllib

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        logger.info(f"Loaded config from: {path}")
        return data
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Failed to parse TOML: {e}", source=str(path))


def _find_config_file() -> Path | None:
    """Find the first existing config file."""
    for path in CONFIG_PATHS:
        if path.exists():
            return path
    return None


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _load_env_overrides() -> dict[str, Any]:
    """Collect overrides from CHARTCORE_* environment variables."""
    overrides: dict[str, Any] = {}

    if level := os.environ.get(f"{ENV_PREFIX}LOG_LEVEL"):
        overrides["log_level"] = level

    generator: dict[str, Any] = {}
    if seed := os.environ.get(f"{ENV_PREFIX}SEED"):
        generator["seed"] = seed
    if bars := os.environ.get(f"{ENV_PREFIX}BARS"):
        generator["bars"] = bars
    if generator:
        overrides["generator"] = generator

    return overrides


def load_config(config_path: Path | str | None = None) -> ChartCoreConfig:
    """
    Load and validate configuration.

    Args:
        config_path: Explicit path to config file (optional)

    Returns:
        Validated ChartCoreConfig

    Raises:
        ConfigError: If configuration is invalid
    """
    config_data: dict[str, Any] = {}
    source: str | None = None

    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}", source=str(path))
        config_data = _load_toml_file(path)
        source = str(path)
    else:
        found_path = _find_config_file()
        if found_path:
            config_data = _load_toml_file(found_path)
            source = str(found_path)

    env_overrides = _load_env_overrides()
    if env_overrides:
        config_data = _deep_merge(config_data, env_overrides)
        logger.debug(f"Applied {len(env_overrides)} override section(s) from environment")

    try:
        config = ChartCoreConfig(**config_data)
    except ValidationError as e:
        errors = e.errors()
        if errors:
            first_error = errors[0]
            field = ".".join(str(loc) for loc in first_error.get("loc", []))
            msg = first_error.get("msg", "Validation error")
            raise ConfigError(f"Invalid configuration: {msg}", source=source, field=field)
        raise ConfigError(f"Invalid configuration: {e}", source=source)

    return config


# Path pinned by reload_config(path); None means use the search path
_active_config_path: Path | None = None


@lru_cache
def get_config() -> ChartCoreConfig:
    """
    Get singleton configuration instance.

    Uses LRU cache to ensure config is loaded only once. After
    reload_config(path), the cached instance comes from that path.
    """
    return load_config(_active_config_path)


def reload_config(config_path: Path | str | None = None) -> ChartCoreConfig:
    """
    Force reload configuration.

    Clears the cache and reloads from file/environment. An explicit path
    becomes the source for later get_config() calls; passing None goes
    back to the search path.
    """
    global _active_config_path
    path = Path(config_path) if config_path else None
    # Validate before pinning so a bad path leaves the current source in place
    load_config(path)
    _active_config_path = path
    get_config.cache_clear()
    return get_config()
