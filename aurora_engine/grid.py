"""OVATION grid index and bilinear interpolation.

The NOAA OVATION model publishes aurora probability on a 1-degree grid:
longitudes 0..359, latitudes -90..90. This module turns parsed points into a
lookup keyed by integer coordinates and interpolates it to any coordinate.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="grid")

Grid = Dict[Tuple[int, int], int]


@dataclass(frozen=True)
class GridPoint:
    """One OVATION sample: integer longitude/latitude and probability (0-100)."""
    longitude: int
    latitude: int
    probability: int


def build_grid(points: Iterable[GridPoint]) -> Grid:
    """Index points by (longitude, latitude); the last duplicate wins."""
    return {(p.longitude, p.latitude): p.probability for p in points}


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def normalize_longitude(longitude: float) -> float:
    """Map any finite longitude into [0, 360)."""
    normalized = longitude % 360.0
    # Tiny negative inputs round up to exactly 360.0 in float arithmetic.
    if normalized >= 360.0:
        return 0.0
    return normalized


def probability_at(grid: Grid, latitude: float, longitude: float) -> float:
    """Bilinearly interpolate the aurora probability at a coordinate.

    Missing grid corners count as 0 (no aurora), so an empty grid yields 0
    everywhere. The longitude seam at 359/0 wraps; latitude is clamped to
    [-90, 90].
    """
    if not grid:
        return 0.0

    lon = normalize_longitude(longitude)
    lat = _clamp(latitude, -90.0, 90.0)

    lon_floor = int(math.floor(lon)) % 360
    lon_ceil = (lon_floor + 1) % 360
    lat_floor = int(_clamp(math.floor(lat), -90, 89))
    lat_ceil = int(_clamp(lat_floor + 1, -90, 90))

    q00 = grid.get((lon_floor, lat_floor), 0)
    q10 = grid.get((lon_ceil, lat_floor), 0)
    q01 = grid.get((lon_floor, lat_ceil), 0)
    q11 = grid.get((lon_ceil, lat_ceil), 0)

    fx = lon - math.floor(lon)
    # Offset from the cell's lower edge; reaches 1.0 only on the +90 row.
    fy = lat - lat_floor

    result = (
        q00 * (1 - fx) * (1 - fy)
        + q10 * fx * (1 - fy)
        + q01 * (1 - fx) * fy
        + q11 * fx * fy
    )
    result = _clamp(float(result), 0.0, 100.0)
    logger.debug("Aurora probability at (%.2f, %.2f): %.1f%%", latitude, longitude, result)
    return result
