"""
cmap2opml.config - Configuration loading and defaults
"""

from cmap2opml.config.defaults import CONFIG_FILENAME, DEFAULT_CONFIG
from cmap2opml.config.loader import (
    find_config_file,
    load_config,
    merge_configs,
    validate_config,
)

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG",
    "find_config_file",
    "load_config",
    "merge_configs",
    "validate_config",
]
