"""Domain vocabulary and strict schemas for visibility evaluations.

This module defines the values that flow between the scoring engine, the
snapshot store and the host: evaluation outcomes, cached snapshots and the
alert state. No scoring or fallback logic lives here.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _StrictBaseModel(BaseModel):
    """Base model with strict extra handling."""

    model_config = ConfigDict(extra="forbid")


class _FrozenModel(_StrictBaseModel):
    """Immutable strict model; instances are superseded, never mutated."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class EvaluationStatus(str, Enum):
    """Where the values of an evaluation came from."""
    FRESH = "fresh"
    CACHED = "cached"
    NO_DATA = "no_data"


class PolarCondition(str, Enum):
    """Explicit "no sunrise/sunset today" states reported by the weather source."""
    POLAR_DAY = "polar_day"
    POLAR_NIGHT = "polar_night"


class VisibilityEvaluation(_FrozenModel):
    """Result of one engine invocation for one location."""

    status: EvaluationStatus
    latitude: float
    longitude: float
    evaluated_at: datetime

    aurora_probability: float | None = Field(default=None, ge=0.0, le=100.0)
    visibility_score: float | None = Field(default=None, ge=0.0, le=100.0)
    cloud_cover: int | None = Field(default=None, ge=0, le=100)
    darkness: float | None = Field(default=None, ge=0.0, le=1.0)
    kp_index: float | None = None
    sunrise: str | None = None
    sunset: str | None = None

    # Only set on cached evaluations: how old the underlying snapshot is.
    age: timedelta | None = None

    @model_validator(mode="after")
    def _check_status_consistency(self) -> "VisibilityEvaluation":
        if self.status == EvaluationStatus.NO_DATA:
            if self.aurora_probability is not None or self.visibility_score is not None:
                raise ValueError("no_data evaluations must not carry a probability or score")
            return self
        if self.aurora_probability is None:
            raise ValueError(f"{self.status.value} evaluations require an aurora probability")
        if self.status == EvaluationStatus.CACHED:
            if self.age is None or self.age < timedelta(0):
                raise ValueError("cached evaluations require a non-negative age")
        return self

    @property
    def is_cached(self) -> bool:
        return self.status == EvaluationStatus.CACHED

    @property
    def has_data(self) -> bool:
        return self.status != EvaluationStatus.NO_DATA

    @property
    def alert_score(self) -> float | None:
        """Score the alert gate compares against: visibility if known, else raw probability."""
        if self.visibility_score is not None:
            return self.visibility_score
        return self.aurora_probability


class CachedSnapshot(_FrozenModel):
    """Last successfully computed evaluation plus the time it was committed."""

    evaluation: VisibilityEvaluation
    created_at: datetime


class AlertState(_FrozenModel):
    """User alert preferences and the time of the last alert that fired."""

    enabled: bool = False
    threshold_percent: int = Field(default=50, ge=0, le=100)
    last_alert_at: datetime | None = None
