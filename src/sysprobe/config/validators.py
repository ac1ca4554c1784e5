"""
Configuration validation utilities.

Turns the raw ``[probe]`` table into a validated ``ProbeConfig``.
"""

import logging
from pathlib import Path
from typing import Any, Dict

from ..models.config import ProbeConfig
from ..validation import (
    ValidationError,
    validate_bool,
    validate_enum_choice,
    validate_non_empty_string,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
PLATFORM_CHOICES = ["auto", "posix", "windows"]


def validate_probe_config(probe_data: Dict[str, Any]) -> ProbeConfig:
    """
    Validate and create a ProbeConfig from raw configuration data.

    Missing keys fall back to the ``ProbeConfig`` defaults.

    Args:
        probe_data: Raw ``[probe]`` table from TOML

    Returns:
        Validated ProbeConfig instance

    Raises:
        ValidationError: If validation fails
    """
    defaults = ProbeConfig()
    general_settings = probe_data.get("general", {})
    shell_settings = probe_data.get("shell", {})
    inspector_settings = probe_data.get("inspector", {})

    for section_name, section in (
        ("general", general_settings),
        ("shell", shell_settings),
        ("inspector", inspector_settings),
    ):
        if not isinstance(section, dict):
            raise ValidationError(
                f"probe.{section_name} must be a table, got {type(section).__name__}",
                field_name=f"probe.{section_name}",
                value=section,
            )

    log_level = validate_enum_choice(
        general_settings.get("log_level", defaults.log_level),
        choices=LOG_LEVELS,
        field_name="probe.general.log_level",
        case_sensitive=False,
    )
    platform = validate_enum_choice(
        general_settings.get("platform", defaults.platform),
        choices=PLATFORM_CHOICES,
        field_name="probe.general.platform",
        case_sensitive=False,
    )

    posix_shell = validate_non_empty_string(
        shell_settings.get("posix_shell", defaults.posix_shell),
        field_name="probe.shell.posix_shell",
    )
    windows_shell = validate_non_empty_string(
        shell_settings.get("windows_shell", defaults.windows_shell),
        field_name="probe.shell.windows_shell",
    )

    enable_enrichment = validate_bool(
        inspector_settings.get("enable_enrichment", defaults.enable_enrichment),
        field_name="probe.inspector.enable_enrichment",
    )
    proc_root = validate_non_empty_string(
        str(inspector_settings.get("proc_root", defaults.proc_root)),
        field_name="probe.inspector.proc_root",
    )
    lsof_command = validate_non_empty_string(
        inspector_settings.get("lsof_command", defaults.lsof_command),
        field_name="probe.inspector.lsof_command",
    )

    config = ProbeConfig(
        log_level=log_level,
        platform=platform,
        posix_shell=posix_shell,
        windows_shell=windows_shell,
        enable_enrichment=enable_enrichment,
        proc_root=Path(proc_root),
        lsof_command=lsof_command,
    )
    logger.debug(f"Validated probe configuration: {config}")
    return config
