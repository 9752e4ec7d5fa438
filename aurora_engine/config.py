"""Engine configuration pulled from environment variables via pydantic."""
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")

MIN_REFRESH_MINUTES = 15


class Settings(BaseSettings):
    """Environment-driven configuration for the aurora visibility worker."""
    model_config = SettingsConfigDict(env_prefix="AURORA_", extra="ignore")

    latitude: float = 48.86
    longitude: float = 2.35
    location_name: str = "Paris, France"
    # City name resolved through geocoding at startup; overrides latitude/longitude.
    location_query: str | None = None
    location_language: str = "en"
    refresh_minutes: int = 30

    data_source: str = "noaa"  # options: noaa, file
    data_dir: str | None = None
    ovation_url: str = "https://services.swpc.noaa.gov/json/ovation_aurora_latest.json"
    kp_index_url: str = "https://services.swpc.noaa.gov/products/noaa-planetary-k-index.json"
    open_meteo_url: str = "https://api.open-meteo.com/v1/forecast"
    geocoding_url: str = "https://geocoding-api.open-meteo.com/v1/search"
    http_timeout_seconds: float = 30.0
    http_retries: int = 2
    http_cache_seconds: int = 300

    store_redis_url: str | None = None
    store_redis_prefix: str = "aurora:"

    notifications_enabled: bool = False
    notification_threshold: int = 50
    stale_after_minutes: int = 60
    log_level: str = "INFO"

    @field_validator("refresh_minutes", mode="after")
    @classmethod
    def enforce_min_refresh(cls, v: int) -> int:
        """Periodic refreshes faster than 15 minutes are raised to 15."""
        return max(MIN_REFRESH_MINUTES, v)

    @field_validator("notification_threshold", mode="after")
    @classmethod
    def clamp_threshold(cls, v: int) -> int:
        return max(0, min(100, v))


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4)}")
