from __future__ import annotations

"""
Configuration Domain Management.

Provides the default runtime configuration of an aggregation pass and the
loader for optional JSON configuration files. Configuration is read-only:
nothing is written back to disk.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
DEFAULT_MAX_WORKERS = 8
DEFAULT_TOKEN_METHOD = "none"
DEFAULT_TOKEN_ENCODING = "o200k_base"
TOKEN_METHODS = ("none", "heuristic", "tiktoken")


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Classification policy additions
        "extra_ignored_dirs": [],
        "extra_ignored_names": [],
        "extra_ignored_extensions": [],
        "extra_binary_extensions": [],

        # Concurrency
        "max_workers": DEFAULT_MAX_WORKERS,

        # Metrics
        "token_method": DEFAULT_TOKEN_METHOD,
        "token_encoding": DEFAULT_TOKEN_ENCODING,

        # Output
        "output_path": "",
    }


# -----------------------------------------------------------------------------
# Loading Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration overrides from a JSON file on top of the defaults.

    A missing, unreadable or malformed file yields the defaults and a
    logged warning.

    Args:
        path: Location of the JSON configuration file.

    Returns:
        Dict[str, Any]: Merged (unvalidated) configuration.
    """
    config = get_default_config()
    if not path:
        return config

    if not os.path.exists(path):
        logger.warning(f"Config file not found: {path}. Using defaults.")
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to read config file '{path}': {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning(f"Config file '{path}' does not contain a JSON object. Using defaults.")
        return config

    for key, value in data.items():
        if key in config:
            config[key] = value
        else:
            logger.debug(f"Ignoring unknown config key: {key}")

    return config
