"""Error kinds returned by the geocoding client.

Geocoding operations never raise for expected failures. They return one of the
error values below, so callers branch with ``isinstance`` or ``match``::

    result = client.geocode("1600 Amphitheatre Parkway")
    match result:
        case GeocodeResponse():
            ...
        case ApiStatusError(status="OVER_QUERY_LIMIT"):
            ...

Exceptions are reserved for programming errors, the cache store boundary and
the opt-in :func:`geocode_client.services.geocode.unwrap` helper.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Literal, Union


@dataclass(frozen=True)
class TransportError:
    """The HTTP request itself failed (connection, DNS, timeout)."""

    message: str
    kind: ClassVar[Literal["transport"]] = "transport"


@dataclass(frozen=True)
class ParseError:
    """The response body was not a JSON object."""

    message: str
    kind: ClassVar[Literal["parse"]] = "parse"


@dataclass(frozen=True)
class ApiStatusError:
    """The service answered with a status other than OK / ZERO_RESULTS."""

    status: str
    error_message: str | None = field(default=None, compare=False)
    kind: ClassVar[Literal["api_status"]] = "api_status"

    @property
    def message(self) -> str:
        text = f"Geocoding API returned error: {self.status}"
        if self.error_message:
            text = f"{text} ({self.error_message})"
        return text


@dataclass(frozen=True)
class CacheError:
    """The cache store raised while reading, writing or deleting."""

    message: str
    kind: ClassVar[Literal["cache"]] = "cache"


GeocodeError = Union[TransportError, ParseError, ApiStatusError, CacheError]

GEOCODE_ERROR_TYPES: tuple[type, ...] = (TransportError, ParseError, ApiStatusError, CacheError)


def is_geocode_error(value: object) -> bool:
    """Return whether ``value`` is one of the geocode error kinds."""
    return isinstance(value, GEOCODE_ERROR_TYPES)


class GeocodeClientError(Exception):
    """Base class for exceptions raised by this package."""


class CacheStoreError(GeocodeClientError):
    """Raised by cache store implementations when the backend fails."""


class GeocodingFailed(GeocodeClientError):
    """Raised by ``unwrap`` when a lookup returned an error value."""

    def __init__(self, error: GeocodeError):
        super().__init__(error.message)
        self.error = error


__all__ = [
    "ApiStatusError",
    "CacheError",
    "CacheStoreError",
    "GEOCODE_ERROR_TYPES",
    "GeocodeClientError",
    "GeocodeError",
    "GeocodingFailed",
    "ParseError",
    "TransportError",
    "is_geocode_error",
]
