"""Shared protocol for snapshot/alert-state storage backends."""

from typing import Optional, Protocol

from aurora_engine.domain import AlertState, CachedSnapshot


class SnapshotStore(Protocol):
    """Key-value store for the last good evaluation and the alert state (last write wins)."""

    def read_snapshot(self) -> Optional[CachedSnapshot]:
        """Return the last committed snapshot, or None if there is none (or it is unreadable)."""

    def write_snapshot(self, snapshot: CachedSnapshot) -> None:
        """Replace the stored snapshot."""

    def read_alert_state(self) -> Optional[AlertState]:
        """Return the stored alert state, or None if never written."""

    def write_alert_state(self, state: AlertState) -> None:
        """Replace the stored alert state."""

    def clear(self) -> None:
        """Remove everything this store holds."""
