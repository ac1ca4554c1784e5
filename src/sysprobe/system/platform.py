"""
Host platform detection.

Only used to pick the shell interpreter and the process querier variant.
"""

import psutil

POSIX = "posix"
WINDOWS = "windows"


def is_windows() -> bool:
    return psutil.WINDOWS


def is_linux() -> bool:
    return psutil.LINUX


def is_mac() -> bool:
    return psutil.MACOS


def current_platform() -> str:
    """Return the platform tag of the running host: ``"windows"`` or ``"posix"``."""
    return WINDOWS if is_windows() else POSIX


def resolve_platform(platform_tag: str) -> str:
    """
    Resolve a configured platform tag.

    ``"auto"`` maps to the running host; ``"posix"`` and ``"windows"`` are
    returned unchanged.

    Raises:
        ValueError: For any other tag.
    """
    tag = platform_tag.lower()
    if tag == "auto":
        return current_platform()
    if tag in (POSIX, WINDOWS):
        return tag
    raise ValueError(f"Unknown platform tag: {platform_tag}")
