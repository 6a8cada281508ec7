from unittest.mock import patch

import pytest
from pydantic import ValidationError

from geocode_client.core.config import DEFAULT_ENDPOINT, Settings
from geocode_client.services.cache_store import MemoryCacheStore
from geocode_client.services.geocode import GeocodingClient


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "GOOGLE_MAPS_API_KEY",
        "GEOCODING_ENDPOINT",
        "GEOCODING_CACHE_ENABLED",
        "GEOCODING_CACHE_TTL",
        "GEOCODING_TIMEOUT",
        "GEOCODING_CACHE_NAMESPACE",
        "REDIS_URL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_settings_defaults():
    config = Settings(_env_file=None)

    assert config.google_maps_api_key == ""
    assert config.geocoding_endpoint == DEFAULT_ENDPOINT
    assert config.geocoding_cache_enabled is True
    assert config.geocoding_cache_ttl == 86400
    assert config.geocoding_timeout == 15.0
    assert config.geocoding_cache_namespace == "google_geocoding_"
    assert config.redis_url is None


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "env-key")
    monkeypatch.setenv("GEOCODING_CACHE_ENABLED", "false")
    monkeypatch.setenv("GEOCODING_CACHE_TTL", "600")
    monkeypatch.setenv("GEOCODING_TIMEOUT", "3.5")

    config = Settings(_env_file=None)

    assert config.google_maps_api_key == "env-key"
    assert config.geocoding_cache_enabled is False
    assert config.geocoding_cache_ttl == 600
    assert config.geocoding_timeout == 3.5


@pytest.mark.parametrize(
    ("name", "value"),
    [("GEOCODING_CACHE_TTL", "-1"), ("GEOCODING_TIMEOUT", "0"), ("GEOCODING_CACHE_NAMESPACE", "")],
)
def test_settings_reject_invalid_values(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_client_from_settings_uses_memory_store_without_redis(monkeypatch):
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "env-key")
    monkeypatch.setenv("GEOCODING_CACHE_TTL", "120")
    monkeypatch.setenv("GEOCODING_CACHE_NAMESPACE", "geo:")

    with GeocodingClient.from_settings(Settings(_env_file=None)) as client:
        assert client.api_key == "env-key"
        assert client.cache_expiration == 120
        assert client.namespace == "geo:"
        assert client.cache_key("geocode_x").startswith("geo:")
        assert isinstance(client.cache, MemoryCacheStore)


def test_client_from_settings_uses_redis_when_configured(monkeypatch):
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "env-key")
    monkeypatch.setenv("REDIS_URL", "redis://cache:6379/1")

    with patch("geocode_client.services.geocode.RedisCacheStore") as mock_store:
        with GeocodingClient.from_settings(Settings(_env_file=None)) as client:
            assert client.cache is mock_store.from_url.return_value

    mock_store.from_url.assert_called_once_with("redis://cache:6379/1")


def test_client_from_settings_overrides_win(monkeypatch, store):
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "env-key")

    with GeocodingClient.from_settings(
        Settings(_env_file=None), api_key="override", cache=store, enable_cache=False
    ) as client:
        assert client.api_key == "override"
        assert client.cache is store
        assert client.cache_enabled is False


def test_client_from_settings_requires_api_key():
    with pytest.raises(ValueError):
        GeocodingClient.from_settings(Settings(_env_file=None))
