"""Google Geocoding API client with cache-aside lookups and normalized responses."""

from geocode_client.core.exceptions import (
    ApiStatusError,
    CacheError,
    GeocodeError,
    GeocodingFailed,
    ParseError,
    TransportError,
)
from geocode_client.dto import Coordinates, GeocodeResponse, ResultView, StructuredAddress
from geocode_client.services.cache_keys import (
    ByAddress,
    ByCoordinates,
    GeocodeQuery,
    derive_cache_key,
    geocode_identifier,
    reverse_identifier,
)
from geocode_client.services.cache_store import CacheStore, MemoryCacheStore, RedisCacheStore
from geocode_client.services.geocode import GeocodingClient, unwrap

__all__ = [
    "ApiStatusError",
    "ByAddress",
    "ByCoordinates",
    "CacheError",
    "CacheStore",
    "Coordinates",
    "GeocodeError",
    "GeocodeQuery",
    "GeocodeResponse",
    "GeocodingClient",
    "GeocodingFailed",
    "MemoryCacheStore",
    "ParseError",
    "RedisCacheStore",
    "ResultView",
    "StructuredAddress",
    "TransportError",
    "derive_cache_key",
    "geocode_identifier",
    "reverse_identifier",
    "unwrap",
]
