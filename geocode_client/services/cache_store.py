"""Cache store backends for raw geocoding responses.

The client only talks to the small :class:`CacheStore` protocol. Two backends
ship: an in-process store used by default and in tests, and a Redis-backed
store for sharing entries between processes.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from typing import Protocol

import redis

from geocode_client.core.exceptions import CacheStoreError
from geocode_client.logging import get_logger

logger = get_logger(__name__)


class CacheStore(Protocol):
    def get(self, key: str) -> bytes | None: ...

    def set(self, key: str, value: bytes, ttl_seconds: int) -> None: ...

    def delete(self, key: str) -> bool: ...

    def delete_prefix(self, namespace: str) -> bool: ...


class MemoryCacheStore:
    """Dictionary-backed store with per-entry expiry.

    Expired entries read as misses and are evicted on access. A ``ttl_seconds``
    of zero or less stores the entry without expiry.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, tuple[bytes, float | None]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> bytes | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at is not None and expires_at <= self._clock():
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: bytes, ttl_seconds: int) -> None:
        expires_at = self._clock() + ttl_seconds if ttl_seconds > 0 else None
        with self._lock:
            self._entries[key] = (value, expires_at)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def delete_prefix(self, namespace: str) -> bool:
        with self._lock:
            doomed = [key for key in self._entries if key.startswith(namespace)]
            for key in doomed:
                del self._entries[key]
        logger.debug("cache_prefix_cleared", namespace=namespace, removed=len(doomed))
        return True

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class RedisCacheStore:
    """Store entries in Redis with ``SETEX`` and sweep them with ``SCAN``."""

    def __init__(self, client: redis.Redis, *, scan_count: int = 500):
        self._client = client
        self._scan_count = scan_count

    @classmethod
    def from_url(cls, url: str, **kwargs) -> RedisCacheStore:
        return cls(redis.Redis.from_url(url), **kwargs)

    def get(self, key: str) -> bytes | None:
        try:
            value = self._client.get(key)
        except redis.RedisError as exc:
            raise CacheStoreError(f"Cache read failed: {exc}") from exc
        if isinstance(value, str):
            return value.encode()
        return value

    def set(self, key: str, value: bytes, ttl_seconds: int) -> None:
        try:
            if ttl_seconds > 0:
                self._client.setex(key, ttl_seconds, value)
            else:
                self._client.set(key, value)
        except redis.RedisError as exc:
            raise CacheStoreError(f"Cache write failed: {exc}") from exc

    def delete(self, key: str) -> bool:
        try:
            return bool(self._client.delete(key))
        except redis.RedisError as exc:
            raise CacheStoreError(f"Cache delete failed: {exc}") from exc

    def delete_prefix(self, namespace: str) -> bool:
        removed = 0
        batch: list[str | bytes] = []
        try:
            for key in self._client.scan_iter(match=f"{namespace}*", count=self._scan_count):
                batch.append(key)
                if len(batch) >= self._scan_count:
                    removed += self._client.delete(*batch)
                    batch.clear()
            if batch:
                removed += self._client.delete(*batch)
        except redis.RedisError as exc:
            raise CacheStoreError(f"Cache sweep failed: {exc}") from exc
        logger.debug("cache_prefix_cleared", namespace=namespace, removed=removed)
        return True


__all__ = ["CacheStore", "MemoryCacheStore", "RedisCacheStore"]
