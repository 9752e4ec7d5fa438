import os
import unittest

from aurora_engine.config import MIN_REFRESH_MINUTES, Settings


class _EnvPatch:
    """Set environment variables for the duration of a with-block."""

    def __init__(self, **values):
        self.values = values
        self.previous = {}

    def __enter__(self):
        for key, value in self.values.items():
            self.previous[key] = os.environ.get(key)
            os.environ[key] = value
        return self

    def __exit__(self, *exc):
        for key, value in self.previous.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value


class TestConfig(unittest.TestCase):
    def test_settings_defaults(self):
        previous = os.environ.pop("AURORA_REFRESH_MINUTES", None)
        try:
            s = Settings()
            self.assertEqual(s.refresh_minutes, 30)
            self.assertEqual(s.data_source, "noaa")
            self.assertIsNone(s.store_redis_url)
            self.assertTrue(s.ovation_url.startswith("https://services.swpc.noaa.gov/"))
        finally:
            if previous is not None:
                os.environ["AURORA_REFRESH_MINUTES"] = previous

    def test_settings_env_override(self):
        with _EnvPatch(AURORA_LATITUDE="69.65", AURORA_LONGITUDE="18.96", AURORA_DATA_SOURCE="file"):
            s = Settings()
        self.assertEqual(s.latitude, 69.65)
        self.assertEqual(s.longitude, 18.96)
        self.assertEqual(s.data_source, "file")

    def test_refresh_interval_has_a_floor(self):
        with _EnvPatch(AURORA_REFRESH_MINUTES="5"):
            s = Settings()
        self.assertEqual(s.refresh_minutes, MIN_REFRESH_MINUTES)

    def test_notification_threshold_clamped(self):
        with _EnvPatch(AURORA_NOTIFICATION_THRESHOLD="140"):
            self.assertEqual(Settings().notification_threshold, 100)
        with _EnvPatch(AURORA_NOTIFICATION_THRESHOLD="-3"):
            self.assertEqual(Settings().notification_threshold, 0)


if __name__ == "__main__":
    unittest.main()
