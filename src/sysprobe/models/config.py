"""
Configuration data models.

This module contains the typed settings object built from ``config.toml``.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass
class ProbeConfig:
    """
    Settings for sysprobe, loaded from the optional ``config.toml``.

    Every field has a default so the package works without any file.
    """

    # [probe.general]
    log_level: str = "INFO"
    platform: str = "auto"  # "auto", "posix" or "windows"

    # [probe.shell]
    posix_shell: str = "/bin/bash"
    windows_shell: str = "powershell.exe"

    # [probe.inspector]
    enable_enrichment: bool = True
    proc_root: Path = Path("/proc")
    lsof_command: str = "lsof"
