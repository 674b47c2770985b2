"""
Configuration management for the explorer.
"""

import os
import sys
import copy
import json
from pathlib import Path
import logging

# Default configuration
DEFAULT_CONFIG = {
    "appearance": {
        "window_size": [350, 350],
        "window_position": [100, 100],
        "title_prefix": "FEX: "
    },
    "scan": {
        "sort_files": True
    },
    "pipeline": {
        "legacy": False,
        "indexing": "row_width",
        "averaging": "total",
        "min_max": "exact",
        "zero_range": "blank",
        "fits_hdu": "first_image"
    },
    "navigation": {
        "next_shortcut": "Right"
    }
}


def get_config_path(custom_path=None):
    """Get the path to the configuration file."""
    if custom_path:
        return Path(custom_path)

    if sys.platform == 'win32':
        config_dir = Path(os.path.expandvars('%APPDATA%')) / "fex"
    else:
        config_dir = Path(os.path.expanduser('~')) / ".fex"

    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir / "config.json"


def load_config(custom_path=None):
    """Load configuration from file or return default if file doesn't exist."""
    logger = logging.getLogger('fex')
    config_path = get_config_path(custom_path)

    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path.exists():
        try:
            with open(config_path, 'r') as f:
                loaded_config = json.load(f)

            _recursive_update(config, loaded_config)
            logger.info(f"Configuration loaded from {config_path}")
        except (OSError, ValueError) as e:
            logger.error(f"Error loading configuration: {e}")
            logger.info("Using default configuration")
    else:
        logger.debug(f"Configuration file not found at {config_path}, using defaults")

    return config


def save_config(config, custom_path=None):
    """Save configuration to file."""
    logger = logging.getLogger('fex')
    config_path = get_config_path(custom_path)

    try:
        with open(config_path, 'w') as f:
            json.dump(config, f, indent=4)
        logger.info(f"Configuration saved to {config_path}")
        return True
    except OSError as e:
        logger.error(f"Error saving configuration: {e}")
        return False


def _recursive_update(d, u):
    """Recursively update a nested dictionary."""
    for k, v in u.items():
        if isinstance(v, dict) and k in d and isinstance(d[k], dict):
            _recursive_update(d[k], v)
        else:
            d[k] = v


def reset_to_defaults(custom_path=None):
    """Reset configuration to defaults."""
    logger = logging.getLogger('fex')
    config_path = get_config_path(custom_path)

    try:
        with open(config_path, 'w') as f:
            json.dump(DEFAULT_CONFIG, f, indent=4)
        logger.info("Configuration reset to defaults")
    except OSError as e:
        logger.error(f"Error resetting configuration: {e}")
    return copy.deepcopy(DEFAULT_CONFIG)
