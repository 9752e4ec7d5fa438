"""Continuous day/night darkness factor with a twilight transition."""

from __future__ import annotations

import datetime as dt
from typing import Optional, Union

from aurora_engine.domain import PolarCondition
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="darkness")

TWILIGHT_MINUTES = 30
NEUTRAL_DARKNESS = 0.5

TimeInput = Union[str, dt.datetime, None]


def parse_local_time(value: TimeInput) -> Optional[dt.datetime]:
    """Parse an ISO-8601 local time ("2026-02-11T17:45"); None if blank or invalid."""
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        return value
    if not isinstance(value, str):
        logger.warning("Failed to parse time of type %s: %r", type(value).__name__, value)
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return dt.datetime.fromisoformat(text)
    except ValueError:
        logger.warning("Failed to parse time: %s", text)
        return None


def _minute_of_day(moment: dt.datetime) -> int:
    return moment.hour * 60 + moment.minute


def darkness_factor(
    sunrise: TimeInput,
    sunset: TimeInput,
    now: dt.datetime,
    *,
    polar: Optional[PolarCondition] = None,
) -> float:
    """Return how dark it is on a 0.0 (daylight) to 1.0 (full night) scale.

    Only the time of day is compared: sunrise and sunset are assumed to be
    today's. The factor rises linearly over the 30 minutes after sunset and
    falls linearly over the 30 minutes before sunrise. When a polar condition
    is known it wins outright; when either boundary is missing the neutral
    0.5 is returned.
    """
    if polar == PolarCondition.POLAR_NIGHT:
        return 1.0
    if polar == PolarCondition.POLAR_DAY:
        return 0.0

    sunrise_time = parse_local_time(sunrise)
    sunset_time = parse_local_time(sunset)
    if sunrise_time is None or sunset_time is None:
        return NEUTRAL_DARKNESS

    minutes = _minute_of_day(now)
    sunrise_min = _minute_of_day(sunrise_time)
    sunset_min = _minute_of_day(sunset_time)

    if minutes >= sunset_min:
        return min(1.0, (minutes - sunset_min) / TWILIGHT_MINUTES)
    if minutes <= sunrise_min:
        return min(1.0, (sunrise_min - minutes) / TWILIGHT_MINUTES)
    return 0.0
