"""Choose the snapshot store backend from configuration."""

import redis

from aurora_engine import config
from aurora_engine.snapshot_store.base import SnapshotStore
from aurora_engine.snapshot_store.memory import InMemorySnapshotStore
from aurora_engine.snapshot_store.redis import RedisSnapshotStore
from utils.logging_utils import get_tagged_logger, mask_url

logger = get_tagged_logger(__name__, tag="snapshot_store/factory")


def build_store(settings: config.Settings | None = None) -> SnapshotStore:
    """Return a Redis store when configured and reachable, else an in-memory one."""
    settings = settings or config.settings
    url = settings.store_redis_url
    logger.debug(f"Initializing snapshot store: redis_url='{mask_url(url) if url else 'None'}'")
    if url:
        try:
            client = redis.Redis.from_url(url)
            client.ping()
            logger.info("Using RedisSnapshotStore at %s", mask_url(url))
            return RedisSnapshotStore(client, prefix=settings.store_redis_prefix)
        except (redis.RedisError, ValueError) as exc:
            logger.warning("Falling back to InMemorySnapshotStore (Redis unavailable): %s", exc)
    return InMemorySnapshotStore()
