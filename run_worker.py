import datetime as dt
import os
import time

from aurora_engine.config import Settings, settings
from aurora_engine.data_sources import FetchError, build_data_source, geocoding_client
from aurora_engine.domain import AlertState, EvaluationStatus
from aurora_engine.engine import TickResult, VisibilityEngine
from aurora_engine.freshness import is_stale
from aurora_engine.snapshot_store import build_store
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="worker")


def resolve_location(cfg: Settings) -> Settings:
    """Replace the configured coordinates with the best match for `location_query`, if set.

    A failed or empty search keeps the configured latitude/longitude.
    """
    if not cfg.location_query:
        return cfg
    try:
        matches = geocoding_client.search_cities(cfg.location_query, lang=cfg.location_language)
    except FetchError as exc:
        logger.warning("Location search for '%s' failed, keeping configured coordinates: %s", cfg.location_query, exc)
        return cfg
    if not matches:
        logger.warning("No city matches '%s', keeping configured coordinates", cfg.location_query)
        return cfg

    best = matches[0]
    logger.info("Resolved '%s' to %s (%.4f, %.4f)", cfg.location_query, best.label, best.latitude, best.longitude)
    return cfg.model_copy(
        update={"latitude": best.latitude, "longitude": best.longitude, "location_name": best.label}
    )


def build_engine(cfg: Settings) -> VisibilityEngine:
    """Wire the configured data source and store into an engine."""
    return VisibilityEngine(
        build_data_source(cfg),
        build_store(cfg),
        default_alert_state=AlertState(
            enabled=cfg.notifications_enabled,
            threshold_percent=cfg.notification_threshold,
        ),
    )


def report(result: TickResult, cfg: Settings) -> None:
    """Log one tick's outcome the way a widget or notification would show it."""
    evaluation = result.evaluation
    if evaluation.status == EvaluationStatus.NO_DATA:
        logger.warning("%s: no aurora data available", cfg.location_name)
    else:
        score = evaluation.visibility_score
        stale = is_stale(evaluation, dt.timedelta(minutes=cfg.stale_after_minutes))
        logger.info(
            "%s: visibility=%s aurora=%.1f%% (%s%s)",
            cfg.location_name,
            f"{score:.1f}%" if score is not None else "N/A",
            evaluation.aurora_probability,
            evaluation.status.value,
            ", stale" if stale else "",
        )
    if result.alert.fires:
        logger.info("Aurora alert: %.0f%% chance of seeing the aurora tonight", evaluation.alert_score)


def run(cfg: Settings, *, once: bool = False) -> None:
    """Tick forever at the configured interval (or just once)."""
    cfg = resolve_location(cfg)
    engine = build_engine(cfg)
    interval = cfg.refresh_minutes * 60
    logger.info("Aurora worker started: every %d min for %s", cfg.refresh_minutes, cfg.location_name)
    while True:
        report(engine.tick(cfg.latitude, cfg.longitude), cfg)
        if once:
            return
        time.sleep(interval)


if __name__ == "__main__":
    setup_logging(level=settings.log_level, job_name="aurora_worker")
    run(settings, once=os.getenv("AURORA_RUN_ONCE", "false").lower() in ("1", "true", "yes"))
