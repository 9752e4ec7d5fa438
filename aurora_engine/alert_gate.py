"""Threshold and cooldown gate for aurora alerts.

The gate only decides. Persisting the returned state (with the new
`last_alert_at`) is the caller's job, which keeps the decision testable
without a store.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Optional

from aurora_engine.domain import AlertState, VisibilityEvaluation
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="alert_gate")

ALERT_COOLDOWN = dt.timedelta(hours=3)


@dataclass(frozen=True)
class AlertDecision:
    """Outcome of one gate evaluation and the state to persist if it fired."""
    fires: bool
    state: AlertState
    reason: str


def alert_score(evaluation: VisibilityEvaluation) -> Optional[float]:
    """Visibility score when weather was available, otherwise the raw aurora probability."""
    return evaluation.alert_score


def evaluate_alert(score: Optional[float], state: AlertState, now: dt.datetime) -> AlertDecision:
    """Decide whether `score` warrants a new alert under `state`."""
    if not state.enabled:
        return AlertDecision(False, state, "disabled")

    if score is None:
        return AlertDecision(False, state, "no_data")

    if score < state.threshold_percent:
        logger.debug("Score %.1f%% below threshold %d%%, no alert", score, state.threshold_percent)
        return AlertDecision(False, state, "below_threshold")

    if state.last_alert_at is not None:
        elapsed = now - state.last_alert_at
        if elapsed < ALERT_COOLDOWN:
            remaining = int((ALERT_COOLDOWN - elapsed).total_seconds() // 60)
            logger.debug("Cooldown active (%d min remaining), skipping alert", remaining)
            return AlertDecision(False, state, "cooldown")

    logger.info("Aurora alert fires at %.1f%% (threshold %d%%)", score, state.threshold_percent)
    return AlertDecision(True, state.model_copy(update={"last_alert_at": now}), "fired")
