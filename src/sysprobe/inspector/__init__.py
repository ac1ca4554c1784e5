"""
Process inspection for a single PID.

- base: ProcessQuerier ABC with the shared primary lookup
- posix: ps-based querier with best-effort enrichment
- windows: tasklist-based querier
- factory: querier selection and the get_process_info() entry point
"""

from .base import ProcessQuerier
from .factory import create_querier, get_process_info, get_querier, reset_querier
from .posix import PosixQuerier
from .windows import WindowsQuerier

__all__ = [
    "ProcessQuerier",
    "PosixQuerier",
    "WindowsQuerier",
    "create_querier",
    "get_process_info",
    "get_querier",
    "reset_querier",
]
