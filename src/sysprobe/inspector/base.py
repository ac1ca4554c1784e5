"""
Defines the abstract process querier.

This module provides:
- run_tool: Runs a listing tool directly (no shell) and captures raw output.
- ProcessQuerier: An abstract base class (ABC) that defines the primary
  lookup shared by every platform variant: run the platform's listing tool
  for one PID, then parse its tabular output into a ProcessInfo.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from typing import List, Optional

from ..config import get_config
from ..encoding import decode_output
from ..models.config import ProbeConfig
from ..models.process import ProcessInfo
from ..validation import ProcessNotFoundError, ProcessQueryError, validate_pid

logger = logging.getLogger(__name__)


def run_tool(argv: List[str]) -> "subprocess.CompletedProcess[bytes]":
    """
    Run an external tool to completion, capturing stdout and stderr as bytes.

    Raises:
        OSError: If the executable cannot be started.
    """
    logger.debug(f"Running tool: {' '.join(argv)}")
    return subprocess.run(
        argv,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        check=False,
    )


class ProcessQuerier(ABC):
    """
    Abstract base class for process queriers.

    Subclasses name the listing tool (``tool_name``), build its argv for a
    PID and map its output rows onto ``ProcessInfo``. A failure anywhere on
    this primary path raises ``ProcessQueryError`` and no record is produced.
    """

    tool_name: str = ""
    """Name of the listing tool, used in error messages."""

    def __init__(self, config: Optional[ProbeConfig] = None):
        """
        Args:
            config: Settings to use; defaults to the global configuration.
        """
        self.config = config or get_config()

    @abstractmethod
    def primary_argv(self, pid: int) -> List[str]:
        """Return the argv of the listing command restricted to ``pid``."""
        pass

    @abstractmethod
    def parse(self, output: str, pid: int) -> ProcessInfo:
        """
        Map the listing tool's output onto the primary record.

        Raises:
            ProcessNotFoundError: If the output has no data row.
            ProcessOutputFormatError: If the data row has too few fields.
        """
        pass

    def primary_query(self, pid: int) -> str:
        """
        Run the listing tool for ``pid`` and return its decoded stdout.

        Raises:
            ProcessQueryError: If the tool cannot be started.
            ProcessNotFoundError: If the tool exits with a non-zero status.
        """
        argv = self.primary_argv(pid)
        try:
            completed = run_tool(argv)
        except OSError as e:
            raise ProcessQueryError(
                f"failed to run {self.tool_name}: {e}", pid=pid, tool=self.tool_name
            ) from e

        if completed.returncode != 0:
            stderr = decode_output(completed.stderr).strip()
            message = (
                f"no process found with PID {pid}: "
                f"{self.tool_name} exited with status {completed.returncode}"
            )
            if stderr:
                message = f"{message} ({stderr})"
            raise ProcessNotFoundError(message, pid=pid, tool=self.tool_name)

        return decode_output(completed.stdout)

    def data_row(self, output: str, pid: int) -> str:
        """
        Return the first data row of ``output``, discarding the header line.

        Raises:
            ProcessNotFoundError: If there are fewer than two lines.
        """
        lines = output.splitlines()
        if len(lines) < 2:
            raise ProcessNotFoundError(
                f"no process found with PID {pid}", pid=pid, tool=self.tool_name
            )
        return lines[1]

    def get_process_info(self, pid: int) -> ProcessInfo:
        """
        Look up the primary record for ``pid``.

        Raises:
            ValidationError: If ``pid`` is not a non-negative integer.
            ProcessQueryError: If the lookup or parsing fails.
        """
        pid = validate_pid(pid)
        output = self.primary_query(pid)
        return self.parse(output, pid)
