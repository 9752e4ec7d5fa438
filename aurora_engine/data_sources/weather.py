"""Weather snapshot type and payload parsing shared by weather-capable sources."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from aurora_engine.domain import PolarCondition
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="weather")

# Daylight durations (seconds) at or beyond which the sun never sets/rises.
POLAR_DAY_SECONDS = 86_399.0
POLAR_NIGHT_SECONDS = 0.0


@dataclass(frozen=True)
class WeatherSnapshot:
    """Current conditions relevant to aurora viewing at one location."""
    cloud_cover: int  # percent, 0-100
    sunrise: Optional[str]  # ISO-8601 local time, None when unknown
    sunset: Optional[str]
    temperature: Optional[float] = None
    apparent_temperature: Optional[float] = None
    weather_code: Optional[int] = None
    is_day: Optional[bool] = None
    polar: Optional[PolarCondition] = None


def _first_or_none(values: Any) -> Any:
    """Return the first element of a daily series, or None when it is empty/missing."""
    if not values:
        return None
    return values[0]


def _sun_time(name: str, values: Any) -> Optional[str]:
    """First entry of a daily sun-time series as text; anything else reads as unknown."""
    value = _first_or_none(values)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        logger.warning("Ignoring non-text %s value: %r", name, value)
        return None
    return value


def polar_condition_from_daylight(daylight_seconds: Optional[float]) -> Optional[PolarCondition]:
    """Classify a day's daylight duration as polar day/night, or None for an ordinary day."""
    if daylight_seconds is None:
        return None
    if daylight_seconds <= POLAR_NIGHT_SECONDS:
        return PolarCondition.POLAR_NIGHT
    if daylight_seconds >= POLAR_DAY_SECONDS:
        return PolarCondition.POLAR_DAY
    return None


def parse_weather_payload(data: Mapping[str, Any]) -> WeatherSnapshot:
    """Convert an Open-Meteo forecast response into a WeatherSnapshot.

    Raises KeyError/TypeError/ValueError on malformed payloads; callers wrap
    those into FetchError.
    """
    current = data["current"]
    daily = data.get("daily") or {}

    cloud = int(round(float(current["cloud_cover"])))
    cloud = max(0, min(100, cloud))

    sunrise = _sun_time("sunrise", daily.get("sunrise"))
    sunset = _sun_time("sunset", daily.get("sunset"))
    is_day = current.get("is_day", None)
    weather_code = current.get("weather_code", None)

    return WeatherSnapshot(
        cloud_cover=cloud,
        sunrise=sunrise,
        sunset=sunset,
        temperature=current.get("temperature_2m", None),
        apparent_temperature=current.get("apparent_temperature", None),
        weather_code=int(weather_code) if weather_code is not None else None,
        is_day=bool(int(is_day)) if is_day is not None else None,
        polar=polar_condition_from_daylight(_first_or_none(daily.get("daylight_duration"))),
    )
