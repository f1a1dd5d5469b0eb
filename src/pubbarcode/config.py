"""
pubbarcode/config.py

Configuration of the publication barcode generator.

Defaults mirror the classic publication barcode proportions (4 units per
module, 200 units bar height). A JSON file may override any key; the file is
looked up at ``$PUBBARCODE_CONFIG`` or ``pubbarcode.json`` in the working
directory.

Example:
    >>> from pubbarcode.config import load_config
    >>> config = load_config()
    >>> config["bar_width"]
    4
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Final, Optional

logger = logging.getLogger(__name__)

__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG",
    "DEFAULT_CONFIG_FILE",
    "get_config",
    "load_config",
]

CONFIG_ENV_VAR: Final[str] = "PUBBARCODE_CONFIG"
DEFAULT_CONFIG_FILE: Final[str] = "pubbarcode.json"

DEFAULT_CONFIG: Final[Dict[str, Any]] = {
    "bar_width": 4,
    "bar_height": 200,
    "jpeg_quality": 90,
    "font_path": None,
    "default_format": "svg",
    "log_level": "INFO",
}


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from a JSON file, falling back to defaults.

    Unknown keys are kept, so callers may stash their own settings next to
    ours. A missing, unreadable or malformed file never raises: a warning is
    logged and the defaults are returned.

    Args:
        config_path: Explicit path. If None, ``$PUBBARCODE_CONFIG`` is used,
            then ``pubbarcode.json`` in the current directory.

    Returns:
        New dict containing every default key, with file values on top.
    """
    if config_path is None:
        config_path = Path(os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE))

    config = dict(DEFAULT_CONFIG)

    if not config_path.exists():
        logger.debug("Config file %s not found, using defaults", config_path)
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            user_config = json.load(f)
        if not isinstance(user_config, dict):
            raise ValueError(
                f"config file must contain a JSON object, got {type(user_config).__name__}"
            )
        config.update(user_config)
        logger.info("Configuration loaded from %s", config_path)
        logger.debug("Configuration: %s", config)
    except json.JSONDecodeError as e:
        logger.warning(
            "Could not parse %s: invalid JSON at line %d, column %d. Using defaults.",
            config_path,
            e.lineno,
            e.colno,
        )
    except OSError as e:
        logger.warning("Could not read %s: %s. Using defaults.", config_path, e)
    except ValueError as e:
        logger.warning("Invalid configuration format: %s. Using defaults.", e)

    return config


_config: Dict[str, Any] = load_config()


def get_config() -> Dict[str, Any]:
    """Return a copy of the configuration loaded at import time."""
    return dict(_config)
