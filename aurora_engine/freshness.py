"""Fresh / cached / no-data decision for what the host should display.

A successful grid fetch produces a fresh evaluation that is committed to the
store, replacing any earlier snapshot. When the fetch fails, the last
committed snapshot is surfaced as cached together with its age; with nothing
committed yet the outcome is an explicit no-data evaluation, never a zero
score. Nothing here retries: the next scheduler tick is the retry.
"""

from __future__ import annotations

import datetime as dt
import math

from aurora_engine.domain import CachedSnapshot, EvaluationStatus, VisibilityEvaluation
from aurora_engine.snapshot_store.base import SnapshotStore
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="freshness")

# Coordinates closer than this (about 10 m) count as the same location.
LOCATION_TOLERANCE_DEGREES = 1e-4


def snapshot_age(created_at: dt.datetime, now: dt.datetime) -> dt.timedelta:
    """Age of a snapshot; a clock that went backwards reads as age zero."""
    return max(now - created_at, dt.timedelta(0))


def commit_snapshot(store: SnapshotStore, evaluation: VisibilityEvaluation, now: dt.datetime) -> CachedSnapshot:
    """Persist a fresh evaluation as the new last-known-good snapshot."""
    snapshot = CachedSnapshot(evaluation=evaluation, created_at=now)
    store.write_snapshot(snapshot)
    logger.debug("Committed snapshot at %s", now.isoformat())
    return snapshot


def _same_location(evaluation: VisibilityEvaluation, latitude: float, longitude: float) -> bool:
    return (
        math.isclose(evaluation.latitude, latitude, abs_tol=LOCATION_TOLERANCE_DEGREES)
        and math.isclose(evaluation.longitude, longitude, abs_tol=LOCATION_TOLERANCE_DEGREES)
    )


def no_data(latitude: float, longitude: float, now: dt.datetime) -> VisibilityEvaluation:
    return VisibilityEvaluation(
        status=EvaluationStatus.NO_DATA,
        latitude=latitude,
        longitude=longitude,
        evaluated_at=now,
    )


def resolve_fallback(
    store: SnapshotStore,
    latitude: float,
    longitude: float,
    now: dt.datetime,
) -> VisibilityEvaluation:
    """Return the cached snapshot re-tagged with its age, or a no-data evaluation.

    A snapshot computed for other coordinates is never served: after a
    location change the old location's score would be misleading.
    """
    snapshot = store.read_snapshot()
    if snapshot is None:
        logger.warning("No cached snapshot; reporting no data")
        return no_data(latitude, longitude, now)
    if not _same_location(snapshot.evaluation, latitude, longitude):
        logger.warning(
            "Cached snapshot is for (%.4f, %.4f), not (%.4f, %.4f); reporting no data",
            snapshot.evaluation.latitude, snapshot.evaluation.longitude, latitude, longitude,
        )
        return no_data(latitude, longitude, now)

    age = snapshot_age(snapshot.created_at, now)
    logger.info("Serving cached snapshot (age %ds)", int(age.total_seconds()))
    payload = snapshot.evaluation.model_dump()
    payload.update(status=EvaluationStatus.CACHED, age=age)
    return VisibilityEvaluation.model_validate(payload)


def is_stale(evaluation: VisibilityEvaluation, max_age: dt.timedelta) -> bool:
    """True for cached evaluations older than the host's staleness threshold."""
    return evaluation.is_cached and evaluation.age is not None and evaluation.age > max_age
