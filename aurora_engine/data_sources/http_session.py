"""Shared HTTP session for the NOAA and Open-Meteo clients."""
from __future__ import annotations

from typing import Any, Mapping, Optional

import requests
import requests_cache
from retry_requests import retry

from aurora_engine.config import settings
from aurora_engine.data_sources.base import FetchError
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="http_session")


def build_session(
    *,
    cache_seconds: int = settings.http_cache_seconds,
    retries: int = settings.http_retries,
) -> requests.Session:
    """Return a short-lived in-memory cached session with bounded retries."""
    cache_session = requests_cache.CachedSession(
        "aurora_http_cache",
        backend="memory",
        expire_after=cache_seconds,
    )
    logger.debug(f"HTTP session: cache {cache_seconds}s, {retries} retries")
    return retry(cache_session, retries=retries, backoff_factor=0.2)


session = build_session()


def get_json(
    http: Any,
    url: str,
    *,
    params: Optional[Mapping[str, Any]] = None,
    timeout: float = settings.http_timeout_seconds,
) -> Any:
    """GET `url` and decode JSON, turning any transport or decode error into FetchError."""
    try:
        resp = http.get(url, params=params, timeout=timeout)
        resp.raise_for_status()
        return resp.json()
    except (requests.RequestException, ValueError) as exc:
        raise FetchError(f"GET {url} failed: {exc}") from exc
