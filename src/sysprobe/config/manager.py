"""
Configuration management and singleton pattern.

This module provides the main configuration interface, loading the optional
TOML file at most once per run and falling back to built-in defaults when no
file is configured.

Lookup order for the configuration file:
1. A path set with ``set_config_path()`` (the CLI's ``--config`` flag).
2. The ``SYSPROBE_CONFIG`` environment variable.
3. No file: ``ProbeConfig()`` defaults.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from ..models.config import ProbeConfig
from ..validation import ErrorSeverity, handle_config_error
from .loader import load_probe_section
from .validators import validate_probe_config

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SYSPROBE_CONFIG"

# --- Global Singleton for Configuration ---

_CONFIG: Optional[ProbeConfig] = None

# Explicit override; takes precedence over the environment variable.
_CONFIG_FILE_PATH: Optional[Path] = None


def set_config_path(config_path: Optional[Path]) -> None:
    """
    Set a custom configuration file path.

    Args:
        config_path: Path to a config.toml file, or None to go back to the
            environment variable / defaults.

    Note:
        Clears any cached configuration so the next ``get_config()`` call
        reloads from the new location.
    """
    global _CONFIG_FILE_PATH, _CONFIG
    _CONFIG_FILE_PATH = Path(config_path) if config_path is not None else None
    _CONFIG = None
    logger.info(f"Configuration path set to: {config_path}")


def clear_config_cache() -> None:
    """Clear the cached configuration, forcing a reload on next access."""
    global _CONFIG
    _CONFIG = None
    logger.debug("Configuration cache cleared")


def resolve_config_path() -> Optional[Path]:
    """Return the configuration file that would be loaded, if any."""
    if _CONFIG_FILE_PATH is not None:
        return _CONFIG_FILE_PATH
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return None


def _load_config(config_path: Optional[Path]) -> ProbeConfig:
    """
    Load and validate the configuration.

    Raises:
        FileNotFoundError: If a configuration file was requested but is missing
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the TOML file is malformed
    """
    if config_path is None:
        logger.debug("No configuration file configured, using defaults")
        return ProbeConfig()

    try:
        probe_data = load_probe_section(config_path)
        config = validate_probe_config(probe_data)
        logger.info(f"Successfully loaded configuration from {config_path}")
        return config
    except Exception as e:
        handle_config_error(
            error=e,
            context=f"loading {config_path}",
            severity=ErrorSeverity.ERROR,
            reraise=True,
            logger=logger
        )
        raise


def get_config() -> ProbeConfig:
    """
    Get the global configuration, loading it if necessary.

    Returns:
        The singleton ProbeConfig instance
    """
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _load_config(resolve_config_path())
    return _CONFIG


def is_config_loaded() -> bool:
    """Check if configuration has been loaded and cached."""
    return _CONFIG is not None


def get_config_info() -> dict:
    """
    Get information about the current configuration state.

    Returns:
        Dictionary with configuration metadata
    """
    config_path = resolve_config_path()
    return {
        "config_loaded": is_config_loaded(),
        "config_path": str(config_path) if config_path else None,
        "platform": _CONFIG.platform if _CONFIG else None,
    }
