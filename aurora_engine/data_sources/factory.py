"""Factory helpers for choosing an aurora data source at startup."""

from __future__ import annotations

from aurora_engine import config
from aurora_engine.data_sources.base import AuroraDataSource, CallableAuroraDataSource
from aurora_engine.data_sources.noaa_client import fetch_kp_index, fetch_ovation_grid
from aurora_engine.data_sources.open_meteo_client import fetch_weather
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/factory")


DEFAULT_SOURCE_NAME = "noaa"


def build_data_source(settings: config.Settings | None = None) -> AuroraDataSource:
    """Instantiate the configured data source."""
    settings = settings or config.settings
    source = (settings.data_source or DEFAULT_SOURCE_NAME).lower()

    if source == "noaa":
        logger.info("Using NOAA SWPC + Open-Meteo data source")
        return CallableAuroraDataSource(
            grid=fetch_ovation_grid,
            weather=fetch_weather,
            kp_index=fetch_kp_index,
        )

    if source == "file":
        from .file_source import FileAuroraDataSource

        if not settings.data_dir:
            raise ValueError("data_dir must be set for the file data source")
        logger.info("Using file data source at %s", settings.data_dir)
        return FileAuroraDataSource(settings.data_dir)

    raise ValueError(f"Unknown data source '{source}'")
