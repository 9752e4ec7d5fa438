"""Helpers for fetching aurora data from NOAA SWPC."""
from __future__ import annotations

import time
from typing import Any, List, Mapping

from aurora_engine.config import settings
from aurora_engine.data_sources.base import FetchError
from aurora_engine.data_sources.http_session import get_json, session
from aurora_engine.grid import Grid, GridPoint, build_grid
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="noaa_client")


def _valid_point(lon: int, lat: int, aurora: int) -> bool:
    return 0 <= lon <= 359 and -90 <= lat <= 90 and 0 <= aurora <= 100


def parse_ovation_payload(data: Mapping[str, Any]) -> List[GridPoint]:
    """Turn the OVATION `coordinates` rows ([lon, lat, aurora]) into GridPoints.

    Rows shorter than three entries or outside the grid's ranges are skipped.
    """
    try:
        rows = data["coordinates"]
    except (KeyError, TypeError) as exc:
        raise FetchError(f"OVATION payload has no coordinates: {exc}") from exc
    if not isinstance(rows, list):
        raise FetchError(f"OVATION coordinates must be a list, got {type(rows).__name__}")

    points: List[GridPoint] = []
    skipped = 0
    for row in rows:
        try:
            if len(row) < 3:
                skipped += 1
                continue
            lon, lat, aurora = int(row[0]), int(row[1]), int(row[2])
        except (TypeError, ValueError):
            skipped += 1
            continue
        if not _valid_point(lon, lat, aurora):
            skipped += 1
            continue
        points.append(GridPoint(longitude=lon, latitude=lat, probability=aurora))

    if skipped:
        logger.warning("Skipped %d malformed OVATION rows", skipped)
    return points


def parse_kp_payload(rows: Any) -> float:
    """Return the latest Kp from NOAA's planetary K-index payload.

    The classic product is a list of lists with a header row first; the newer
    product is a list of objects keyed by `Kp`. The last row is the latest.
    """
    try:
        latest = rows[-1]
        if isinstance(latest, Mapping):
            kp = float(latest.get("Kp", latest.get("kp_index")))
            time_tag = latest.get("time_tag")
        else:
            kp = float(latest[1])
            time_tag = latest[0]
    except (IndexError, KeyError, TypeError, ValueError) as exc:
        raise FetchError(f"Malformed Kp payload: {exc}") from exc
    if kp < 0:
        raise FetchError(f"Negative Kp value {kp}")
    logger.debug("Kp index %.2f at %s", kp, time_tag)
    return kp


def fetch_ovation_points() -> List[GridPoint]:
    """Fetch and parse the latest OVATION nowcast."""
    started = time.monotonic()
    data = get_json(session, settings.ovation_url)
    points = parse_ovation_payload(data)
    logger.debug(
        "OVATION fetched in %dms: %d points, observation=%s",
        int((time.monotonic() - started) * 1000),
        len(points),
        data.get("Observation Time") if isinstance(data, Mapping) else None,
    )
    return points


def fetch_ovation_grid() -> Grid:
    """Fetch the OVATION nowcast and index it; a new grid is built on every call."""
    return build_grid(fetch_ovation_points())


def fetch_kp_index() -> float:
    """Fetch the current planetary Kp index."""
    return parse_kp_payload(get_json(session, settings.kp_index_url))
