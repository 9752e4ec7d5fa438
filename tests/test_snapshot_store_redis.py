import unittest
from datetime import datetime

from aurora_engine.domain import AlertState, CachedSnapshot, EvaluationStatus, VisibilityEvaluation
from aurora_engine.snapshot_store.redis import RedisSnapshotStore


class FakeRedis:
    def __init__(self):
        self.store = {}

    def set(self, key, value):
        self.store[key] = value

    def get(self, key):
        return self.store.get(key)

    def delete(self, key):
        self.store.pop(key, None)

    def scan_iter(self, pattern):
        prefix = pattern.rstrip("*")
        return [k for k in list(self.store.keys()) if k.startswith(prefix)]


class BrokenRedis:
    def __getattr__(self, name):
        def fail(*_args, **_kwargs):
            raise ConnectionError("redis down")

        return fail


class TestRedisSnapshotStore(unittest.TestCase):
    def _sample_snapshot(self):
        at = datetime(2026, 2, 11, 22, 30)
        evaluation = VisibilityEvaluation(
            status=EvaluationStatus.FRESH,
            latitude=64.8,
            longitude=-147.7,
            evaluated_at=at,
            aurora_probability=55.0,
            visibility_score=41.25,
            cloud_cover=25,
            darkness=1.0,
            kp_index=5.33,
            sunrise="2026-02-11T09:31",
            sunset="2026-02-11T17:02",
        )
        return CachedSnapshot(evaluation=evaluation, created_at=at)

    def setUp(self):
        self.redis = FakeRedis()
        self.store = RedisSnapshotStore(self.redis, prefix="test:")

    def test_snapshot_roundtrip(self):
        snapshot = self._sample_snapshot()
        self.store.write_snapshot(snapshot)

        self.assertIn("test:snapshot", self.redis.store)
        self.assertEqual(self.store.read_snapshot(), snapshot)

    def test_alert_state_roundtrip(self):
        state = AlertState(enabled=True, threshold_percent=65, last_alert_at=datetime(2026, 2, 11, 21, 0))
        self.store.write_alert_state(state)
        self.assertEqual(self.store.read_alert_state(), state)

    def test_missing_keys_read_none(self):
        self.assertIsNone(self.store.read_snapshot())
        self.assertIsNone(self.store.read_alert_state())

    def test_corrupt_payload_is_discarded(self):
        self.redis.store["test:snapshot"] = b'{"evaluation": "oops"}'
        self.redis.store["test:alert_state"] = b"not json"
        self.assertIsNone(self.store.read_snapshot())
        self.assertIsNone(self.store.read_alert_state())

    def test_clear_only_touches_prefix(self):
        self.store.write_snapshot(self._sample_snapshot())
        self.store.write_alert_state(AlertState())
        self.redis.store["other:key"] = b"keep"

        self.store.clear()

        self.assertEqual(list(self.redis.store), ["other:key"])

    def test_redis_errors_do_not_escape(self):
        store = RedisSnapshotStore(BrokenRedis())
        store.write_snapshot(self._sample_snapshot())
        store.write_alert_state(AlertState())
        self.assertIsNone(store.read_snapshot())
        self.assertIsNone(store.read_alert_state())
        store.clear()


if __name__ == "__main__":
    unittest.main()
