"""
Shell command data models.

``CommandOptions`` describes how the shell subprocess is launched and
``CommandResult`` carries what came back.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from ..validation.exceptions import CommandError


@dataclass
class CommandOptions:
    """
    Optional launch settings for ``exec_command``.

    Attributes:
        cwd: Working directory for the shell, None to inherit.
        env: Extra environment variables for the child.
        inherit_env: Merge ``env`` over the current environment when True,
            pass ``env`` alone when False.
        pass_fds: Additional file descriptors kept open in the child.
            Only honoured on POSIX.
    """

    cwd: Optional[Union[str, Path]] = None
    env: Dict[str, str] = field(default_factory=dict)
    inherit_env: bool = True
    pass_fds: Tuple[int, ...] = ()

    def build_env(self) -> Optional[Dict[str, str]]:
        """
        Return the environment mapping for the child process.

        None means "inherit unchanged", which lets subprocess skip copying
        the environment.
        """
        if self.inherit_env:
            if not self.env:
                return None
            merged = os.environ.copy()
            merged.update(self.env)
            return merged
        return dict(self.env)


@dataclass
class CommandResult:
    """
    Decoded output of a shell command.

    ``stdout`` is only populated on success; on failure ``error`` is set and
    ``stderr`` holds whatever could be decoded.
    """

    stdout: str
    stderr: str
    returncode: int
    error: Optional[CommandError] = None

    @property
    def success(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        """Raise the stored ``CommandError``, if any."""
        if self.error is not None:
            raise self.error
