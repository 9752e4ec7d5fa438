"""Redis-backed snapshot store."""

from typing import Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from aurora_engine.domain import AlertState, CachedSnapshot
from aurora_engine.snapshot_store.base import SnapshotStore
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="snapshot_store/redis_snapshot_store")

ModelT = TypeVar("ModelT", bound=BaseModel)


class RedisSnapshotStore(SnapshotStore):
    """Redis-backed store. Payloads are pydantic models serialized as JSON.

    Redis errors never escape: reads degrade to "missing" and writes are
    logged, so a flaky cache cannot fail an evaluation tick.
    """

    SNAPSHOT_KEY = "snapshot"
    ALERT_STATE_KEY = "alert_state"

    def __init__(self, client, prefix: str = "aurora:") -> None:
        """Initialize with a Redis client and a key prefix."""
        logger.debug("Initializing RedisSnapshotStore")
        self.client = client
        self.prefix = prefix

    def _key(self, name: str) -> str:
        """Return the Redis key for a logical entry."""
        return f"{self.prefix}{name}"

    def _read(self, name: str, model: Type[ModelT]) -> Optional[ModelT]:
        """Fetch and validate one entry, returning None if missing or unreadable."""
        try:
            raw = self.client.get(self._key(name))
        except Exception as exc:  # pragma: no cover - defensive
            logger.error("Failed to read %s from Redis: %s", name, exc)
            return None
        if not raw:
            return None
        try:
            return model.model_validate_json(raw)
        except ValidationError as exc:
            logger.error("Discarding corrupt %s payload: %s", name, exc)
            return None

    def _write(self, name: str, value: BaseModel) -> None:
        """Serialize and store one entry."""
        try:
            self.client.set(self._key(name), value.model_dump_json().encode("utf-8"))
        except Exception as exc:  # pragma: no cover - defensive
            logger.error("Failed to write %s to Redis: %s", name, exc)

    def read_snapshot(self) -> Optional[CachedSnapshot]:
        return self._read(self.SNAPSHOT_KEY, CachedSnapshot)

    def write_snapshot(self, snapshot: CachedSnapshot) -> None:
        self._write(self.SNAPSHOT_KEY, snapshot)

    def read_alert_state(self) -> Optional[AlertState]:
        return self._read(self.ALERT_STATE_KEY, AlertState)

    def write_alert_state(self, state: AlertState) -> None:
        self._write(self.ALERT_STATE_KEY, state)

    def clear(self) -> None:
        """Best-effort clear of every key under the configured prefix."""
        try:
            for key in self.client.scan_iter(f"{self.prefix}*"):
                self.client.delete(key)
        except Exception as exc:  # pragma: no cover - defensive
            logger.error("Failed to clear snapshot store in Redis: %s", exc)
