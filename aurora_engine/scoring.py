"""Combine aurora probability, cloud cover and darkness into a visibility score.

    score = aurora_probability * (1 - cloud_cover / 100) * darkness

Zero clouds and full darkness reproduce the raw probability; overcast sky or
daylight force the score to zero.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from aurora_engine.darkness import darkness_factor
from aurora_engine.data_sources.weather import WeatherSnapshot
from aurora_engine.domain import EvaluationStatus, VisibilityEvaluation
from aurora_engine.grid import Grid, probability_at
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="scoring")


def _clamp_percent(value: float) -> float:
    """Clamp a percentage to the 0-100 range."""
    return max(0.0, min(100.0, value))


def _as_text(value: object) -> Optional[str]:
    """Sun times are echoed only when they are text; other shapes were unusable anyway."""
    return value if isinstance(value, str) else None


def combine_score(aurora_probability: float, cloud_cover: int, darkness: float) -> float:
    """Return the bounded visibility score for one set of inputs."""
    cloud_factor = 1.0 - cloud_cover / 100.0
    score = _clamp_percent(aurora_probability * cloud_factor * darkness)
    logger.debug(
        "Visibility: aurora=%.1f%% * cloud=%.2f * night=%.2f = %.1f%%",
        aurora_probability, cloud_factor, darkness, score,
    )
    return score


def score_location(
    grid: Grid,
    latitude: float,
    longitude: float,
    now: dt.datetime,
    *,
    weather: Optional[WeatherSnapshot] = None,
    kp_index: Optional[float] = None,
) -> VisibilityEvaluation:
    """Build a fresh evaluation; without weather only the raw probability is known."""
    probability = probability_at(grid, latitude, longitude)

    score = None
    darkness = None
    cloud_cover = None
    if weather is not None:
        cloud_cover = weather.cloud_cover
        darkness = darkness_factor(weather.sunrise, weather.sunset, now, polar=weather.polar)
        score = combine_score(probability, cloud_cover, darkness)

    return VisibilityEvaluation(
        status=EvaluationStatus.FRESH,
        latitude=latitude,
        longitude=longitude,
        evaluated_at=now,
        aurora_probability=probability,
        visibility_score=score,
        cloud_cover=cloud_cover,
        darkness=darkness,
        kp_index=kp_index,
        sunrise=_as_text(weather.sunrise) if weather else None,
        sunset=_as_text(weather.sunset) if weather else None,
    )
