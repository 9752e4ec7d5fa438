"""Offline data source that replays saved NOAA/Open-Meteo payloads from disk."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from aurora_engine.data_sources.base import AuroraDataSource, FetchError
from aurora_engine.data_sources.noaa_client import parse_kp_payload, parse_ovation_payload
from aurora_engine.data_sources.weather import WeatherSnapshot, parse_weather_payload
from aurora_engine.grid import Grid, build_grid
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/file_source")

OVATION_FILE = "ovation_aurora_latest.json"
WEATHER_FILE = "weather.json"
KP_FILE = "kp_index.json"


class FileAuroraDataSource(AuroraDataSource):
    """Read the same payloads the HTTP clients receive, from a directory.

    Useful for demos, replaying an interesting night, or running without
    network access. Weather is returned for any coordinate.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _load(self, name: str) -> Any:
        path = self.directory / name
        try:
            with path.open("r", encoding="utf-8") as fh:
                return json.load(fh)
        except (OSError, ValueError) as exc:
            raise FetchError(f"Could not read {path}: {exc}") from exc

    def fetch_grid(self) -> Grid:
        points = parse_ovation_payload(self._load(OVATION_FILE))
        logger.debug("Loaded %d OVATION points from %s", len(points), self.directory)
        return build_grid(points)

    def fetch_weather(self, latitude: float, longitude: float) -> WeatherSnapshot:
        try:
            return parse_weather_payload(self._load(WEATHER_FILE))
        except (KeyError, TypeError, ValueError) as exc:
            raise FetchError(f"Malformed weather file: {exc}") from exc

    def fetch_kp_index(self) -> float:
        return parse_kp_payload(self._load(KP_FILE))
