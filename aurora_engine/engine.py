"""Visibility engine: one evaluation per scheduler tick.

The engine is synchronous and holds no state between ticks beyond what it
commits to the injected store. Every collaborator failure is folded into a
fallback outcome, so `evaluate` and `tick` never raise to the host.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Callable, Optional

from aurora_engine.alert_gate import AlertDecision, alert_score, evaluate_alert
from aurora_engine.data_sources.base import AuroraDataSource, FetchError
from aurora_engine.data_sources.weather import WeatherSnapshot
from aurora_engine.domain import AlertState, VisibilityEvaluation
from aurora_engine.freshness import commit_snapshot, no_data, resolve_fallback
from aurora_engine.grid import Grid
from aurora_engine.scoring import score_location
from aurora_engine.snapshot_store.base import SnapshotStore
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="engine")

Clock = Callable[[], dt.datetime]


@dataclass(frozen=True)
class TickResult:
    """What one scheduler tick produced."""
    evaluation: VisibilityEvaluation
    alert: AlertDecision


class VisibilityEngine:
    """Evaluate aurora visibility for a location and gate alerts on the result."""

    def __init__(
        self,
        data_source: AuroraDataSource,
        store: SnapshotStore,
        *,
        clock: Clock = dt.datetime.now,
        default_alert_state: Optional[AlertState] = None,
    ) -> None:
        self._source = data_source
        self._store = store
        self._clock = clock
        self._default_alert_state = default_alert_state or AlertState()

    def _fetch(self, what: str, fetch: Callable[[], object]):
        """Run one collaborator call; any failure is logged and becomes None."""
        try:
            return fetch()
        except FetchError as exc:
            logger.warning("Failed to fetch %s: %s", what, exc)
        except Exception as exc:
            logger.error("Unexpected error fetching %s: %s", what, exc)
        return None

    def _fallback(self, latitude: float, longitude: float, now: dt.datetime) -> VisibilityEvaluation:
        try:
            return resolve_fallback(self._store, latitude, longitude, now)
        except Exception as exc:
            logger.error("Failed to read cached snapshot: %s", exc)
            return no_data(latitude, longitude, now)

    def evaluate(self, latitude: float, longitude: float) -> VisibilityEvaluation:
        """Produce a fresh, cached or no-data evaluation for the coordinate."""
        now = self._clock()

        grid: Optional[Grid] = self._fetch("aurora grid", self._source.fetch_grid)
        if grid is None:
            return self._fallback(latitude, longitude, now)

        weather: Optional[WeatherSnapshot] = self._fetch(
            "weather", lambda: self._source.fetch_weather(latitude, longitude)
        )
        kp_index: Optional[float] = self._fetch("Kp index", self._source.fetch_kp_index)

        try:
            evaluation = score_location(
                grid, latitude, longitude, now, weather=weather, kp_index=kp_index
            )
        except Exception as exc:
            logger.error("Failed to score fresh data, falling back: %s", exc)
            return self._fallback(latitude, longitude, now)

        try:
            commit_snapshot(self._store, evaluation, now)
        except Exception as exc:
            logger.error("Failed to commit snapshot: %s", exc)
        logger.debug(
            "Fresh evaluation: aurora=%.1f%%, visibility=%s, cloud=%s, kp=%s",
            evaluation.aurora_probability,
            f"{evaluation.visibility_score:.1f}%" if evaluation.visibility_score is not None else "N/A",
            evaluation.cloud_cover if evaluation.cloud_cover is not None else "N/A",
            f"{kp_index:.1f}" if kp_index is not None else "N/A",
        )
        return evaluation

    def alert_state(self) -> AlertState:
        """Stored alert state, or the configured defaults if none was saved yet."""
        return self._store.read_alert_state() or self._default_alert_state

    def should_alert(
        self,
        evaluation: VisibilityEvaluation,
        state: Optional[AlertState] = None,
    ) -> AlertDecision:
        """Gate an evaluation; the caller persists `decision.state` if it fires."""
        if state is None:
            state = self.alert_state()
        return evaluate_alert(alert_score(evaluation), state, self._clock())

    def configure_alerts(self, enabled: bool, threshold_percent: int) -> AlertState:
        """Save alert preferences, keeping the last alert time."""
        state = self.alert_state().model_copy(
            update={"enabled": enabled, "threshold_percent": max(0, min(100, threshold_percent))}
        )
        self._store.write_alert_state(state)
        logger.debug("Alert settings saved: enabled=%s, threshold=%d%%", enabled, state.threshold_percent)
        return state

    def tick(self, latitude: float, longitude: float) -> TickResult:
        """Evaluate, gate and commit the new alert state when an alert fires."""
        evaluation = self.evaluate(latitude, longitude)
        decision = self.should_alert(evaluation)
        if decision.fires:
            self._store.write_alert_state(decision.state)
        return TickResult(evaluation=evaluation, alert=decision)
