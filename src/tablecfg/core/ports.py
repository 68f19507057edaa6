"""Core ports (interfaces) for tablecfg.

The bootstrap core only talks to storage through this protocol. It is
intentionally small and capability-oriented so tests can substitute an
in-memory table and the boto3 adapter stays at the edge.
"""

from __future__ import annotations

from typing import Any, Protocol, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    from .config_model import ScanPage, TableDescription, TableSpec


@runtime_checkable
class TableStore(Protocol):
    """Capability-bearing client for the configuration table."""

    def create_table_if_absent(self, spec: "TableSpec") -> bool:
        """Create the table; returns False if it already existed."""

    def delete_table_if_exists(self, table_name: str) -> bool:
        """Delete the table; returns False if it did not exist."""

    def wait_until_active(self, table_name: str, timeout: float, poll_interval: float) -> None:
        """Block until the table status is ACTIVE or the timeout elapses."""

    def wait_until_deleted(self, table_name: str, timeout: float, poll_interval: float) -> None:
        """Block until the table no longer exists or the timeout elapses."""

    def describe_table(self, table_name: str) -> "TableDescription":
        """Return the table's metadata."""

    def scan(
        self, table_name: str, exclusive_start_key: dict[str, Any] | None = None
    ) -> "ScanPage":
        """Return one page of an unfiltered scan."""
