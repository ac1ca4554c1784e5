"""
Process querier implementation for Windows hosts.

Uses ``tasklist`` in verbose CSV mode. tasklist exposes neither CPU usage
nor a per-process user column that we read, so those fields are "N/A", and
there is no enrichment step on this platform.
"""

from typing import List

from ..models.process import ProcessInfo
from ..validation import ProcessOutputFormatError
from .base import ProcessQuerier

NOT_AVAILABLE = "N/A"


class WindowsQuerier(ProcessQuerier):
    """Queries a process with ``tasklist /FO CSV /V``."""

    tool_name = "tasklist"

    FIELD_SEPARATOR: str = '","'
    MIN_FIELDS: int = 9

    def primary_argv(self, pid: int) -> List[str]:
        return ["tasklist", "/FI", f"PID eq {pid}", "/FO", "CSV", "/V"]

    def parse(self, output: str, pid: int) -> ProcessInfo:
        """
        Parse one verbose CSV row from tasklist.

        Example row (columns: Image Name, PID, Session Name, Session#,
        Mem Usage, Status, User Name, CPU Time, Window Title):
            "python.exe","4242","Console","1","12,345 K","Running","HOST\\alice","0:00:01","N/A"

        The row is split on the literal ``","`` so numbers containing commas
        stay intact. Field 4 is memory, 5 is state and 8 is cmd.
        """
        row = self.data_row(output, pid).strip()
        fields = row.split(self.FIELD_SEPARATOR)
        if len(fields) < self.MIN_FIELDS:
            raise ProcessOutputFormatError(
                f"unexpected {self.tool_name} output format", pid=pid, tool=self.tool_name
            )
        # Splitting leaves the row's outer quotes on the first and last field.
        fields[0] = fields[0].lstrip('"')
        fields[-1] = fields[-1].rstrip('"')

        return ProcessInfo(
            pid=pid,
            cpu=NOT_AVAILABLE,
            memory=fields[4],
            state=fields[5],
            user=NOT_AVAILABLE,
            cmd=fields[8],
        )
