"""
Data models for the sysprobe package.

This package contains the dataclasses shared across modules:
- config: Typed settings loaded from TOML
- command: Shell command launch options and results
- process: Process records and enrichment lookup results
"""

from .command import CommandOptions, CommandResult
from .config import ProbeConfig
from .process import Lookup, ProcessInfo

__all__ = [
    "CommandOptions",
    "CommandResult",
    "Lookup",
    "ProbeConfig",
    "ProcessInfo",
]
