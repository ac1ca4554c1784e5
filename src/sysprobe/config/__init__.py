"""
Configuration management for the sysprobe package.

This module provides a clean interface for loading, validating, and accessing
configuration data from an optional TOML file with singleton management.
"""

# Main configuration interface
from .manager import (
    CONFIG_ENV_VAR,
    clear_config_cache,
    get_config,
    get_config_info,
    is_config_loaded,
    resolve_config_path,
    set_config_path,
)

# For advanced usage - direct access to loaders and validators
from .loader import load_probe_section, load_toml_file
from .validators import validate_probe_config

__all__ = [
    # Main interface
    "CONFIG_ENV_VAR",
    "get_config",
    "set_config_path",
    "clear_config_cache",
    "is_config_loaded",
    "get_config_info",
    "resolve_config_path",
    # Advanced interface
    "load_toml_file",
    "load_probe_section",
    "validate_probe_config",
]
