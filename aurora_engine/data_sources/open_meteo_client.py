"""Helpers for fetching cloud cover and sun times from the Open-Meteo API."""
from __future__ import annotations

import time

from aurora_engine.config import settings
from aurora_engine.data_sources.base import FetchError
from aurora_engine.data_sources.http_session import get_json, session
from aurora_engine.data_sources.weather import WeatherSnapshot, parse_weather_payload
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="open_meteo_client")

CURRENT_VARS = ["cloud_cover", "temperature_2m", "apparent_temperature", "weather_code", "is_day"]
DAILY_VARS = ["sunrise", "sunset", "daylight_duration"]


def fetch_weather(latitude: float, longitude: float, *, timezone: str = "auto") -> WeatherSnapshot:
    """Fetch current cloud cover plus today's sunrise/sunset in the location's local time."""
    params = {
        "latitude": latitude,
        "longitude": longitude,
        "current": ",".join(CURRENT_VARS),
        "daily": ",".join(DAILY_VARS),
        "timezone": timezone,
        "forecast_days": 1,
    }

    started = time.monotonic()
    data = get_json(session, settings.open_meteo_url, params=params)
    try:
        weather = parse_weather_payload(data)
    except (KeyError, TypeError, ValueError) as exc:
        raise FetchError(f"Malformed Open-Meteo payload: {exc}") from exc

    logger.debug(
        "Weather fetched in %dms: cloud=%d%%, sunrise=%s, sunset=%s, polar=%s",
        int((time.monotonic() - started) * 1000),
        weather.cloud_cover,
        weather.sunrise,
        weather.sunset,
        weather.polar.value if weather.polar else None,
    )
    return weather
