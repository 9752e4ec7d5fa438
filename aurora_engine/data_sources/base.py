"""Interfaces and helpers for aurora/weather data sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from aurora_engine.grid import Grid
from aurora_engine.data_sources.weather import WeatherSnapshot


class FetchError(RuntimeError):
    """Transient failure to obtain data: network, timeout, HTTP status or malformed payload."""


class AuroraDataSource(Protocol):
    """Interface for anything that can provide the OVATION grid and local weather."""

    def fetch_grid(self) -> Grid:
        """Return a freshly built probability grid; raise FetchError on failure."""
        ...

    def fetch_weather(self, latitude: float, longitude: float) -> WeatherSnapshot:
        """Return current cloud cover and today's sunrise/sunset; raise FetchError on failure."""
        ...

    def fetch_kp_index(self) -> float:
        """Return the latest planetary Kp index; raise FetchError on failure."""
        ...


@dataclass
class CallableAuroraDataSource(AuroraDataSource):
    """Wrap plain callables so they can be swapped for different backends."""

    grid: Callable[[], Grid]
    weather: Callable[[float, float], WeatherSnapshot]
    kp_index: Optional[Callable[[], float]] = None

    def fetch_grid(self) -> Grid:
        """Delegate to the configured grid callable."""
        return self.grid()

    def fetch_weather(self, latitude: float, longitude: float) -> WeatherSnapshot:
        """Delegate to the configured weather callable."""
        return self.weather(latitude, longitude)

    def fetch_kp_index(self) -> float:
        """Delegate to the configured Kp callable, if any."""
        if self.kp_index is None:
            raise FetchError("No Kp index source configured")
        return self.kp_index()
