#!/usr/bin/env python3
"""
Configuration loading (config.yaml)

Keys:
  omdb_api_key:     OMDb access key (falls back to $OMDB_API_KEY)
  omdb_base_url:    API endpoint (default https://www.omdbapi.com/)
  watchlist_path:   JSON file holding the persisted watchlist; relative paths are
                    taken from the config file's directory
  request_timeout:  seconds per HTTP request
"""

import os
import logging
from pathlib import Path
from typing import Optional

import yaml

from lib.constants import OMDB_BASE_URL, DEFAULT_WATCHLIST_PATH, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

DEFAULTS = {
    'omdb_api_key': None,
    'omdb_base_url': OMDB_BASE_URL,
    'watchlist_path': DEFAULT_WATCHLIST_PATH,
    'request_timeout': DEFAULT_TIMEOUT,
}


class ConfigError(Exception):
    """Configuration is missing something the app cannot run without"""


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration from YAML file, filling unset keys with defaults"""
    config = dict(DEFAULTS)

    if config_path is not None and Path(config_path).exists():
        with open(config_path, 'r') as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ConfigError(f"{config_path} must contain a mapping, got {type(loaded).__name__}")
        config.update({k: v for k, v in loaded.items() if v is not None})
        logger.debug(f"Loaded configuration from {config_path}")
    elif config_path is not None:
        logger.info(f"Config file not found: {config_path} (using defaults)")

    if not config.get('omdb_api_key'):
        config['omdb_api_key'] = os.environ.get('OMDB_API_KEY') or None

    try:
        config['request_timeout'] = float(config['request_timeout'])
    except (TypeError, ValueError):
        raise ConfigError(f"request_timeout must be a number, got {config['request_timeout']!r}")

    # Relative paths belong to the config file's directory, not the cwd
    watchlist_path = Path(config['watchlist_path']).expanduser()
    if config_path is not None and not watchlist_path.is_absolute():
        watchlist_path = Path(config_path).parent / watchlist_path
    config['watchlist_path'] = watchlist_path
    return config


def require_api_key(config: dict) -> str:
    key = config.get('omdb_api_key')
    if not key:
        raise ConfigError("No OMDb API key: set omdb_api_key in config.yaml or OMDB_API_KEY")
    return key
