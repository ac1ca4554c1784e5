"""
Process querier implementation for POSIX hosts.

This module provides the PosixQuerier class, which reads the primary record
from ``ps`` and then enriches it with five independent lookups: the thread
list, ``/proc/<pid>/io``, the start time, the parent PID and the open
network connections reported by ``lsof``.
"""

import logging
from typing import List

from ..encoding import decode_output
from ..models.process import Lookup, ProcessInfo
from ..system.commands import check_command_installed
from ..validation import ProcessOutputFormatError
from .base import ProcessQuerier, run_tool

logger = logging.getLogger(__name__)


class PosixQuerier(ProcessQuerier):
    """
    Queries a process with ``ps`` and best-effort secondary lookups.

    Each enrichment lookup returns a ``Lookup``. A missing lookup leaves the
    corresponding field at its zero value and never affects the others or
    the primary record.

    Attributes:
        PRIMARY_COLUMNS: Columns requested from ``ps -o``.
        MIN_FIELDS: Minimum whitespace-separated fields in the data row.
    """

    tool_name = "ps"

    PRIMARY_COLUMNS: str = "pid,%cpu,%mem,state,user,comm"
    MIN_FIELDS: int = 6

    def primary_argv(self, pid: int) -> List[str]:
        return ["ps", "-p", str(pid), "-o", self.PRIMARY_COLUMNS]

    def parse(self, output: str, pid: int) -> ProcessInfo:
        """
        Parse ``ps -o pid,%cpu,%mem,state,user,comm`` output.

        Example `ps` output:
            PID %CPU %MEM S USER     COMMAND
           4242  0.3  1.2 S alice    python3

        Field 0 echoes the PID and is discarded; fields 1-5 map to cpu,
        memory, state, user and cmd.
        """
        fields = self.data_row(output, pid).split()
        if len(fields) < self.MIN_FIELDS:
            raise ProcessOutputFormatError(
                f"unexpected {self.tool_name} output format", pid=pid, tool=self.tool_name
            )

        return ProcessInfo(
            pid=pid,
            cpu=fields[1],
            memory=fields[2],
            state=fields[3],
            user=fields[4],
            cmd=fields[5],
        )

    def get_process_info(self, pid: int) -> ProcessInfo:
        info = super().get_process_info(pid)
        if self.config.enable_enrichment:
            self.enrich(info)
        return info

    def enrich(self, info: ProcessInfo) -> ProcessInfo:
        """
        Run every enrichment lookup for ``info.pid`` and fill what succeeded.

        All five lookups run even when earlier ones are missing.
        """
        pid = info.pid
        threads = self.lookup_threads(pid)
        io_stats = self.lookup_io_stats(pid)
        start_time = self.lookup_start_time(pid)
        parent_pid = self.lookup_parent_pid(pid)
        network_connections = self.lookup_network_connections(pid)

        info.threads = threads.value_or([])
        info.io_stats = io_stats.value_or("")
        info.start_time = start_time.value_or("")
        info.parent_pid = parent_pid.value_or(0)
        info.network_connections = network_connections.value_or("")

        for name, lookup in (
            ("threads", threads),
            ("io_stats", io_stats),
            ("start_time", start_time),
            ("parent_pid", parent_pid),
            ("network_connections", network_connections),
        ):
            if not lookup.present:
                logger.debug(f"PID {pid}: {name} unavailable: {lookup.reason}")

        return info

    # --- Enrichment lookups ---

    def _run_text(self, argv: List[str]) -> Lookup[str]:
        """Run ``argv`` and return its decoded stdout, or why it failed."""
        try:
            completed = run_tool(argv)
        except OSError as e:
            return Lookup.missing(f"failed to run {argv[0]}: {e}")
        if completed.returncode != 0:
            return Lookup.missing(f"{argv[0]} exited with status {completed.returncode}")
        return Lookup.found(decode_output(completed.stdout))

    def lookup_threads(self, pid: int) -> Lookup[List[str]]:
        """Thread rows from ``ps -T -p <pid>``, header dropped, blank lines skipped."""
        output = self._run_text(["ps", "-T", "-p", str(pid)])
        if not output.present:
            return Lookup.missing(output.reason)
        lines = output.value.splitlines()
        return Lookup.found([line for line in lines[1:] if line.strip()])

    def lookup_io_stats(self, pid: int) -> Lookup[str]:
        """Raw contents of ``<proc_root>/<pid>/io`` (Linux only)."""
        io_path = self.config.proc_root / str(pid) / "io"
        try:
            data = io_path.read_bytes()
        except OSError as e:
            return Lookup.missing(f"cannot read {io_path}: {e}")
        return Lookup.found(decode_output(data))

    def lookup_start_time(self, pid: int) -> Lookup[str]:
        """Start time as printed by ``ps -p <pid> -o lstart=``."""
        output = self._run_text(["ps", "-p", str(pid), "-o", "lstart="])
        if not output.present:
            return Lookup.missing(output.reason)
        return Lookup.found(output.value.strip())

    def lookup_parent_pid(self, pid: int) -> Lookup[int]:
        """Parent PID from ``ps -o ppid= -p <pid>``."""
        output = self._run_text(["ps", "-o", "ppid=", "-p", str(pid)])
        if not output.present:
            return Lookup.missing(output.reason)
        try:
            return Lookup.found(int(output.value.strip()))
        except ValueError:
            return Lookup.missing(f"unparseable parent PID: {output.value.strip()!r}")

    def lookup_network_connections(self, pid: int) -> Lookup[str]:
        """Raw ``lsof -p <pid> -i`` output."""
        lsof = self.config.lsof_command
        if not check_command_installed(lsof):
            return Lookup.missing(f"{lsof} is not installed")
        return self._run_text([lsof, "-p", str(pid), "-i"])
