import unittest

from aurora_engine.data_sources.base import CallableAuroraDataSource
from aurora_engine.data_sources.factory import DEFAULT_SOURCE_NAME, build_data_source
from aurora_engine.data_sources.file_source import FileAuroraDataSource
from aurora_engine.data_sources.noaa_client import fetch_kp_index, fetch_ovation_grid


class DummySettings:
    def __init__(self, **kwargs):
        for k, v in kwargs.items():
            setattr(self, k, v)
        # provide defaults if not passed
        self.data_source = getattr(self, "data_source", DEFAULT_SOURCE_NAME)
        self.data_dir = getattr(self, "data_dir", None)


class TestDataSourceFactory(unittest.TestCase):
    def test_build_noaa_default(self):
        ds = build_data_source(DummySettings())
        self.assertIsInstance(ds, CallableAuroraDataSource)
        self.assertIs(ds.grid, fetch_ovation_grid)
        self.assertIs(ds.kp_index, fetch_kp_index)

    def test_source_name_is_case_insensitive(self):
        self.assertIsInstance(build_data_source(DummySettings(data_source="NOAA")), CallableAuroraDataSource)

    def test_file_source(self):
        ds = build_data_source(DummySettings(data_source="file", data_dir="/tmp/aurora"))
        self.assertIsInstance(ds, FileAuroraDataSource)
        self.assertEqual(str(ds.directory), "/tmp/aurora")

    def test_file_source_missing_dir_raises(self):
        with self.assertRaises(ValueError):
            build_data_source(DummySettings(data_source="file"))

    def test_unknown_source_raises(self):
        with self.assertRaises(ValueError):
            build_data_source(DummySettings(data_source="unknown-source"))


if __name__ == "__main__":
    unittest.main()
