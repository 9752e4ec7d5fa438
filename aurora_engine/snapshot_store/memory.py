"""In-memory snapshot store, intended for development and tests."""

import threading
from typing import Optional

from aurora_engine.domain import AlertState, CachedSnapshot
from aurora_engine.snapshot_store.base import SnapshotStore
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="snapshot_store/in_memory_snapshot_store")


class InMemorySnapshotStore(SnapshotStore):
    """Thread-safe in-process store (dev/test); contents vanish with the process."""

    def __init__(self) -> None:
        logger.debug("Initializing InMemorySnapshotStore")
        self._snapshot: Optional[CachedSnapshot] = None
        self._alert_state: Optional[AlertState] = None
        self._lock = threading.Lock()

    def read_snapshot(self) -> Optional[CachedSnapshot]:
        with self._lock:
            return self._snapshot

    def write_snapshot(self, snapshot: CachedSnapshot) -> None:
        with self._lock:
            self._snapshot = snapshot

    def read_alert_state(self) -> Optional[AlertState]:
        with self._lock:
            return self._alert_state

    def write_alert_state(self, state: AlertState) -> None:
        with self._lock:
            self._alert_state = state

    def clear(self) -> None:
        """Drop the snapshot and alert state."""
        with self._lock:
            self._snapshot = None
            self._alert_state = None
