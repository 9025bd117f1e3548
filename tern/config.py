"""Tern config loader.

Reads tern.config (YAML) from the project directory.
Caches result after first load. Call _reset_config() in tests.
"""

import copy
import logging
import os

import yaml

from tern.errors import ConfigError

_config = None

OUTPUT_FORMATS = ("text", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULTS = {
    "output": {
        "format": "text",
    },
    "logging": {
        "level": "WARNING",
    },
}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base, returning a new dict."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _validate(config: dict) -> dict:
    for section in DEFAULTS:
        if not isinstance(config.get(section), dict):
            raise ConfigError(f"{section} must be a mapping")
    fmt = config["output"]["format"]
    if fmt not in OUTPUT_FORMATS:
        raise ConfigError(f"output.format must be one of {', '.join(OUTPUT_FORMATS)}, got {fmt!r}")
    level = str(config["logging"]["level"]).upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"logging.level must be one of {', '.join(LOG_LEVELS)}, got {level!r}")
    config["logging"]["level"] = level
    return config


def get_config(config_dir: str | None = None) -> dict:
    """Load and return the Tern config, caching after first call."""
    global _config
    if _config is not None:
        return _config

    if config_dir is None:
        config_dir = os.getcwd()

    config_path = os.path.join(config_dir, "tern.config")

    if os.path.isfile(config_path):
        with open(config_path) as f:
            try:
                user_config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"invalid YAML in {config_path}: {e}") from e
        if user_config and isinstance(user_config, dict):
            merged = _deep_merge(DEFAULTS, user_config)
        else:
            merged = DEFAULTS
    else:
        merged = DEFAULTS

    _config = _validate(copy.deepcopy(merged))
    return _config


def configure_logging(config: dict) -> None:
    """Set up root logging at the configured level."""
    logging.basicConfig(
        level=getattr(logging, config["logging"]["level"]),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _reset_config():
    """Clear cached config. Call this in tests."""
    global _config
    _config = None
