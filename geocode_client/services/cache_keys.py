"""Cache key derivation and the query variants that feed it."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Union

from geocode_client.core.config import DEFAULT_CACHE_NAMESPACE

CACHE_NAMESPACE = DEFAULT_CACHE_NAMESPACE


def derive_cache_key(identifier: str, credential: str, *, namespace: str = CACHE_NAMESPACE) -> str:
    """Return the cache key for ``identifier`` under ``credential``.

    The credential is mixed into the digest so two API keys never share
    entries. The namespace prefix lets ``delete_prefix`` sweep only our keys.
    """
    if not identifier:
        raise ValueError("cache identifier must not be empty")
    # Not security-critical; sha256 only for a fixed-length, stable key
    digest = hashlib.sha256(f"{identifier}{credential}".encode()).hexdigest()
    return f"{namespace}{digest}"


def geocode_identifier(address: str) -> str:
    return f"geocode_{address}"


def reverse_identifier(lat: float, lng: float) -> str:
    return f"reverse_{float(lat)}_{float(lng)}"


@dataclass(frozen=True)
class ByAddress:
    """Forward geocoding query."""

    address: str

    @property
    def identifier(self) -> str:
        return geocode_identifier(self.address)

    @property
    def params(self) -> dict[str, str]:
        return {"address": self.address}


@dataclass(frozen=True)
class ByCoordinates:
    """Reverse geocoding query."""

    lat: float
    lng: float

    def __post_init__(self) -> None:
        # 37 and 37.0 must share a cache entry
        object.__setattr__(self, "lat", float(self.lat))
        object.__setattr__(self, "lng", float(self.lng))

    @property
    def identifier(self) -> str:
        return reverse_identifier(self.lat, self.lng)

    @property
    def params(self) -> dict[str, str]:
        return {"latlng": f"{self.lat},{self.lng}"}


GeocodeQuery = Union[ByAddress, ByCoordinates]


__all__ = [
    "ByAddress",
    "ByCoordinates",
    "CACHE_NAMESPACE",
    "GeocodeQuery",
    "derive_cache_key",
    "geocode_identifier",
    "reverse_identifier",
]
