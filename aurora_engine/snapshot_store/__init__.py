"""Snapshot storage backends."""

from .base import SnapshotStore
from .factory import build_store
from .memory import InMemorySnapshotStore
from .redis import RedisSnapshotStore

__all__ = [
    "SnapshotStore",
    "InMemorySnapshotStore",
    "RedisSnapshotStore",
    "build_store",
]
