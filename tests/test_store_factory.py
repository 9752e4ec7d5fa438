import unittest
from unittest.mock import patch

import redis

from aurora_engine.snapshot_store.factory import build_store
from aurora_engine.snapshot_store.memory import InMemorySnapshotStore
from aurora_engine.snapshot_store.redis import RedisSnapshotStore


class DummySettings:
    def __init__(self, store_redis_url=None, store_redis_prefix="aurora:"):
        self.store_redis_url = store_redis_url
        self.store_redis_prefix = store_redis_prefix


class PingingClient:
    def ping(self):
        return True


class UnreachableClient:
    def ping(self):
        raise redis.ConnectionError("connection refused")


class TestBuildStore(unittest.TestCase):
    def test_no_url_uses_memory(self):
        self.assertIsInstance(build_store(DummySettings()), InMemorySnapshotStore)

    def test_reachable_redis(self):
        with patch("redis.Redis.from_url", return_value=PingingClient()) as from_url:
            store = build_store(DummySettings("redis://:secret@cache:6379/0", "x:"))
        from_url.assert_called_once_with("redis://:secret@cache:6379/0")
        self.assertIsInstance(store, RedisSnapshotStore)
        self.assertEqual(store.prefix, "x:")

    def test_unreachable_redis_falls_back_to_memory(self):
        with patch("redis.Redis.from_url", return_value=UnreachableClient()):
            store = build_store(DummySettings("redis://cache:6379/0"))
        self.assertIsInstance(store, InMemorySnapshotStore)

    def test_invalid_url_falls_back_to_memory(self):
        with patch("redis.Redis.from_url", side_effect=ValueError("bad scheme")):
            store = build_store(DummySettings("memcached://cache"))
        self.assertIsInstance(store, InMemorySnapshotStore)


if __name__ == "__main__":
    unittest.main()
