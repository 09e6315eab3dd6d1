"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

Models (Config) are defined in quakewatch/core/config.py.
"""

import logging
import os
from datetime import date
from pathlib import Path
from typing import Any

import yaml

from quakewatch.core.config import Config, validate_config
from quakewatch.core.geo import BoundingBox


logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = "config/config.yaml"

# Environment variable -> (config field, parser)
ENV_OVERRIDES = {
    "USGS_API_URL": ("feed_url", str),
    "POLLING_INTERVAL_SECONDS": ("polling_interval_seconds", int),
    "FEED_START_DATE": ("feed_start_date", date.fromisoformat),
}


class ConfigError(ValueError):
    """Configuration is invalid."""


def _resolve_value(value: Any) -> Any:
    """Resolve a ${VAR} placeholder from the environment.

    Non-string values and plain strings are returned unchanged. An unset
    variable leaves the placeholder in place.
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def _parse_bounds(data: dict[str, Any]) -> BoundingBox:
    """Parse a bounding box from config data."""
    return BoundingBox(
        min_latitude=float(data["min_latitude"]),
        max_latitude=float(data["max_latitude"]),
        min_longitude=float(data["min_longitude"]),
        max_longitude=float(data["max_longitude"]),
    )


def _parse_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object
    """
    defaults = Config()

    bounds = defaults.bounds
    if "bounds" in data:
        bounds = _parse_bounds(data["bounds"])

    return Config(
        feed_url=_resolve_value(data.get("feed_url", defaults.feed_url)),
        bounds=bounds,
        feed_start_date=_parse_date(data.get("feed_start_date", defaults.feed_start_date)),
        polling_interval_seconds=int(
            data.get("polling_interval_seconds", defaults.polling_interval_seconds)
        ),
        request_timeout_seconds=int(
            data.get("request_timeout_seconds", defaults.request_timeout_seconds)
        ),
        novelty_window_minutes=int(
            data.get("novelty_window_minutes", defaults.novelty_window_minutes)
        ),
        recent_window_hours=int(
            data.get("recent_window_hours", defaults.recent_window_hours)
        ),
        announced_retention_hours=int(
            data.get("announced_retention_hours", defaults.announced_retention_hours)
        ),
        export_basename=data.get("export_basename", defaults.export_basename),
    )


def apply_env_overrides(config: Config) -> Config:
    """Apply environment variable overrides to a config in place.

    Environment variables:
        USGS_API_URL: Feed endpoint
        POLLING_INTERVAL_SECONDS: Refresh interval
        FEED_START_DATE: Earliest date requested (YYYY-MM-DD)

    Returns:
        The same Config object
    """
    for var_name, (field_name, parse) in ENV_OVERRIDES.items():
        raw = os.environ.get(var_name)
        if not raw:
            continue
        try:
            setattr(config, field_name, parse(raw))
        except ValueError:
            logger.warning("Ignoring invalid %s=%r", var_name, raw)
    return config


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file plus environment overrides.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed and validated Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
        ConfigError: If the resulting configuration is invalid
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", DEFAULT_CONFIG_PATH)

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        config = Config()
    else:
        with open(path, "r") as f:
            data = yaml.safe_load(f)

        if data is None:
            logger.warning("Config file is empty, using defaults")
            config = Config()
        else:
            config = load_config_from_dict(data)

    apply_env_overrides(config)

    result = validate_config(config)
    for warning in result.warnings:
        logger.warning("Config %s: %s", warning.field, warning.message)
    if not result.valid:
        messages = "; ".join(f"{e.field}: {e.message}" for e in result.critical_errors)
        raise ConfigError(f"Invalid configuration: {messages}")

    logger.info(
        "Loaded config: polling every %ds, novelty window %dmin",
        config.polling_interval_seconds,
        config.novelty_window_minutes,
    )

    return config
