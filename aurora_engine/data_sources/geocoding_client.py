"""City search through the Open-Meteo geocoding API."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping

from aurora_engine.config import settings
from aurora_engine.data_sources.base import FetchError
from aurora_engine.data_sources.http_session import get_json, session
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="geocoding_client")

MAX_RESULTS = 5


@dataclass(frozen=True)
class GeocodingResult:
    """One city match."""
    name: str
    latitude: float
    longitude: float
    country: str = ""
    admin1: str = ""

    @property
    def label(self) -> str:
        """Display name such as "Tromsø, Troms, Norway"."""
        return ", ".join(part for part in (self.name, self.admin1, self.country) if part)


def parse_geocoding_payload(data: Any) -> List[GeocodingResult]:
    """Turn a search response into results; a response without `results` means no match.

    Entries missing a name or coordinates are skipped.
    """
    if not isinstance(data, Mapping):
        raise FetchError(f"Geocoding payload must be an object, got {type(data).__name__}")
    rows = data.get("results") or []
    if not isinstance(rows, list):
        raise FetchError(f"Geocoding results must be a list, got {type(rows).__name__}")

    results: List[GeocodingResult] = []
    for row in rows:
        try:
            results.append(
                GeocodingResult(
                    name=str(row["name"]),
                    latitude=float(row["latitude"]),
                    longitude=float(row["longitude"]),
                    country=row.get("country") or "",
                    admin1=row.get("admin1") or "",
                )
            )
        except (KeyError, TypeError, ValueError, AttributeError):
            logger.warning("Skipping malformed geocoding entry: %r", row)
    return results


def search_cities(query: str, lang: str = "en") -> List[GeocodingResult]:
    """Search cities matching `query`, best match first."""
    logger.debug("Geocoding search: '%s' (lang=%s)", query, lang)
    params = {
        "name": query,
        "count": MAX_RESULTS,
        "language": lang,
        "format": "json",
    }
    results = parse_geocoding_payload(get_json(session, settings.geocoding_url, params=params))
    logger.debug("Geocoding returned %d results", len(results))
    return results
