"""
Process data models.

This module contains the point-in-time process record returned by the
inspector and the per-field lookup result used while enriching it.
"""

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


@dataclass
class ProcessInfo:
    """
    Snapshot of one process at observation time.

    The primary fields (``pid`` to ``cmd``) always come together from the
    platform's listing tool. The remaining fields are filled by best-effort
    lookups on POSIX hosts and keep their zero value when a lookup fails or
    on Windows.
    """

    # --- Primary record ---
    pid: int
    cpu: str  # "N/A" on Windows
    memory: str
    state: str
    user: str  # "N/A" on Windows
    cmd: str

    # --- Enrichment (POSIX only) ---
    threads: List[str] = field(default_factory=list)
    io_stats: str = ""
    start_time: str = ""
    parent_pid: int = 0
    network_connections: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serialisable copy of the record."""
        return dataclasses.asdict(self)


@dataclass(frozen=True)
class Lookup(Generic[T]):
    """
    Outcome of a single best-effort enrichment lookup.

    Either holds a value (``Lookup.found``) or records why it is absent
    (``Lookup.missing``). The reason is for diagnostics only and never
    reaches the caller of ``get_process_info``.
    """

    value: Optional[T] = None
    reason: Optional[str] = None
    present: bool = False

    @classmethod
    def found(cls, value: T) -> "Lookup[T]":
        return cls(value=value, present=True)

    @classmethod
    def missing(cls, reason: str) -> "Lookup[T]":
        return cls(reason=reason)

    def value_or(self, default: T) -> T:
        """Return the looked-up value, or ``default`` when absent."""
        return self.value if self.present else default
