"""Data source factories for plugging different aurora/weather backends."""

from .base import AuroraDataSource, CallableAuroraDataSource, FetchError
from .factory import build_data_source
from .file_source import FileAuroraDataSource
from .geocoding_client import GeocodingResult, search_cities
from .noaa_client import fetch_kp_index, fetch_ovation_grid, fetch_ovation_points
from .open_meteo_client import fetch_weather
from .weather import WeatherSnapshot

__all__ = [
    "build_data_source",
    "AuroraDataSource",
    "CallableAuroraDataSource",
    "FetchError",
    "FileAuroraDataSource",
    "GeocodingResult",
    "WeatherSnapshot",
    "fetch_kp_index",
    "fetch_ovation_grid",
    "fetch_ovation_points",
    "fetch_weather",
    "search_cities",
]
