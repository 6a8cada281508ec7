"""Google Geocoding client with cache-aside lookups."""

from __future__ import annotations

import json
from typing import Any, Union

import httpx

from geocode_client.core.config import (
    DEFAULT_CACHE_TTL,
    DEFAULT_ENDPOINT,
    DEFAULT_TIMEOUT,
    Settings,
)
from geocode_client.core.config import settings as default_settings
from geocode_client.core.exceptions import (
    ApiStatusError,
    CacheError,
    CacheStoreError,
    GeocodeError,
    GeocodingFailed,
    is_geocode_error,
)
from geocode_client.dto.response import SUCCESS_STATUSES, GeocodeResponse
from geocode_client.logging import get_logger
from geocode_client.services.cache_keys import (
    CACHE_NAMESPACE,
    ByAddress,
    ByCoordinates,
    GeocodeQuery,
    derive_cache_key,
)
from geocode_client.services.cache_store import CacheStore, MemoryCacheStore, RedisCacheStore
from geocode_client.services.http_utils import build_client, fetch_json

logger = get_logger(__name__)

API_ENDPOINT = DEFAULT_ENDPOINT

GeocodeResult = Union[GeocodeResponse, GeocodeError]


class GeocodingClient:
    """Forward and reverse geocoding against the Google Geocoding API.

    Lookups check the cache store first, call the API on a miss and store the
    raw response when the API answered ``OK`` or ``ZERO_RESULTS``. Failures are
    returned as error values (see :mod:`geocode_client.core.exceptions`) and are
    never cached.

    Concurrent misses for the same query each hit the network; there is no
    in-flight request coalescing.
    """

    def __init__(
        self,
        api_key: str,
        enable_cache: bool = True,
        cache_expiration: int = DEFAULT_CACHE_TTL,
        *,
        cache: CacheStore | None = None,
        http_client: httpx.Client | None = None,
        endpoint: str = API_ENDPOINT,
        timeout: float = DEFAULT_TIMEOUT,
        namespace: str = CACHE_NAMESPACE,
    ):
        self.api_key = api_key
        self.cache_enabled = enable_cache
        self.cache_expiration = cache_expiration
        self.cache: CacheStore = cache if cache is not None else MemoryCacheStore()
        self.endpoint = endpoint
        self.timeout = timeout
        self.namespace = namespace
        self._owns_http_client = http_client is None
        self._http_client = http_client if http_client is not None else build_client(timeout=timeout)

    @classmethod
    def from_settings(cls, config: Settings | None = None, **overrides: Any) -> GeocodingClient:
        """Build a client from :class:`Settings`; keyword overrides win."""

        config = config or default_settings
        if "cache" not in overrides:
            overrides["cache"] = (
                RedisCacheStore.from_url(config.redis_url) if config.redis_url else MemoryCacheStore()
            )
        kwargs: dict[str, Any] = {
            "api_key": config.google_maps_api_key,
            "enable_cache": config.geocoding_cache_enabled,
            "cache_expiration": config.geocoding_cache_ttl,
            "endpoint": config.geocoding_endpoint,
            "timeout": config.geocoding_timeout,
            "namespace": config.geocoding_cache_namespace,
        }
        kwargs.update(overrides)
        return cls(**kwargs)

    # Configuration

    @property
    def api_key(self) -> str:
        return self._api_key

    @api_key.setter
    def api_key(self, value: str) -> None:
        if not value or not value.strip():
            raise ValueError("Google Geocoding API key must not be empty")
        self._api_key = value.strip()

    @property
    def cache_enabled(self) -> bool:
        return self._cache_enabled

    @cache_enabled.setter
    def cache_enabled(self, value: bool) -> None:
        self._cache_enabled = bool(value)

    @property
    def cache_expiration(self) -> int:
        """Seconds a stored response stays valid."""

        return self._cache_expiration

    @cache_expiration.setter
    def cache_expiration(self, value: int) -> None:
        if value < 0:
            raise ValueError("cache expiration must be >= 0 seconds")
        self._cache_expiration = int(value)

    # Lookups

    def geocode(self, address: str) -> GeocodeResult:
        """Geocode an address to coordinates."""

        return self.lookup(ByAddress(address))

    def reverse_geocode(self, lat: float, lng: float) -> GeocodeResult:
        """Reverse geocode coordinates to an address."""

        return self.lookup(ByCoordinates(lat, lng))

    def lookup(self, query: GeocodeQuery) -> GeocodeResult:
        cache_key = self.cache_key(query.identifier)
        log = logger.bind(cache_key=cache_key)

        if self.cache_enabled:
            try:
                cached = self.cache.get(cache_key)
            except CacheStoreError as exc:
                return CacheError(str(exc))
            payload = _decode_cached(cached)
            if payload is not None:
                log.debug("geocode_cache_hit")
                return GeocodeResponse(payload)
            log.debug("geocode_cache_miss")

        result = self._request(query.params)
        if is_geocode_error(result):
            return result

        if self.cache_enabled:
            try:
                self.cache.set(
                    cache_key,
                    json.dumps(result, ensure_ascii=False).encode("utf-8"),
                    self.cache_expiration,
                )
            except CacheStoreError as exc:
                return CacheError(str(exc))
            log.debug("geocode_cache_stored", ttl=self.cache_expiration)

        return GeocodeResponse(result)

    def _request(self, params: dict[str, str]) -> dict[str, Any] | GeocodeError:
        payload = fetch_json(
            self._http_client,
            self.endpoint,
            {**params, "key": self.api_key},
            timeout=self.timeout,
        )
        if is_geocode_error(payload):
            return payload

        status = payload.get("status")
        if not isinstance(status, str):
            status = ""
        if status not in SUCCESS_STATUSES:
            return ApiStatusError(status=status, error_message=payload.get("error_message"))
        return payload

    # Cache maintenance

    def cache_key(self, identifier: str) -> str:
        return derive_cache_key(identifier, self.api_key, namespace=self.namespace)

    def clear_cache(self, identifier: str | None = None) -> CacheError | None:
        """Delete one cached lookup, or every entry under this client's namespace.

        ``identifier`` is the value the lookup was keyed on, e.g.
        ``geocode_identifier(address)`` or ``reverse_identifier(lat, lng)``.
        Deleting an entry that is not cached is not an error.
        """

        try:
            if identifier is not None:
                self.cache.delete(self.cache_key(identifier))
            else:
                self.cache.delete_prefix(self.namespace)
        except CacheStoreError as exc:
            return CacheError(str(exc))
        return None

    # Resource handling

    def close(self) -> None:
        if self._owns_http_client:
            self._http_client.close()

    def __enter__(self) -> GeocodingClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _decode_cached(raw: bytes | None) -> dict[str, Any] | None:
    """Return the cached document, or ``None`` for a miss or an unreadable entry."""

    if raw is None:
        return None
    try:
        payload = json.loads(raw)
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None


def unwrap(result: GeocodeResult) -> GeocodeResponse:
    """Return the response or raise :class:`GeocodingFailed` for an error value."""

    if is_geocode_error(result):
        raise GeocodingFailed(result)
    return result


__all__ = ["API_ENDPOINT", "GeocodeResult", "GeocodingClient", "unwrap"]
