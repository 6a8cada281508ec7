# geocode_client/core/config.py
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ENDPOINT = "https://maps.googleapis.com/maps/api/geocode/json"
DEFAULT_CACHE_TTL = 86400  # 24h
DEFAULT_TIMEOUT = 15.0
DEFAULT_CACHE_NAMESPACE = "google_geocoding_"


class Settings(BaseSettings):
    google_maps_api_key: str = ""  # = GOOGLE_MAPS_API_KEY
    geocoding_endpoint: str = DEFAULT_ENDPOINT
    geocoding_cache_enabled: bool = True
    geocoding_cache_ttl: int = Field(default=DEFAULT_CACHE_TTL, ge=0)
    geocoding_timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    geocoding_cache_namespace: str = Field(default=DEFAULT_CACHE_NAMESPACE, min_length=1)
    redis_url: str | None = None  # unset -> in-process cache

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",  # read GOOGLE_MAPS_API_KEY / REDIS_URL as-is
        extra="ignore",
    )


settings = Settings()
