"""Content cache for binary assets keyed by request identity.

The networking core only needs two operations from a cache:

- `lookup(key)`: return the stored asset or None.
- `store(key, asset)`: persist an asset.

Eviction is entirely the cache's responsibility. `MemoryAssetCache` is the
default process-local implementation: a cachetools LRU (or TTL) cache weighted
by asset size and capped by entry count. It holds its own lock because it is
the shared store behind concurrent requests.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from time import monotonic
from typing import Callable, Mapping, Protocol

import httpx
from cachetools import Cache, LRUCache, TTLCache
from loguru import logger

from cocktailnet.config import Settings, get_settings

log = logger.bind(module="net.cache")

__all__ = [
    "AssetCache",
    "CacheKey",
    "CachedAsset",
    "MemoryAssetCache",
    "build_asset_cache",
]


@dataclass(frozen=True, slots=True)
class CacheKey:
    """Request identity used for cache equality (method + URL)."""

    method: str
    url: str

    @classmethod
    def for_request(cls, request: httpx.Request) -> "CacheKey":
        return cls(method=request.method.upper(), url=str(request.url))


@dataclass(slots=True)
class CachedAsset:
    """Raw bytes plus the response metadata needed to reuse them."""

    content: bytes
    headers: Mapping[str, str] = field(default_factory=dict)
    status_code: int = 200
    url: str | None = None
    stored_at: float = field(default_factory=monotonic)

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def from_response(cls, response: httpx.Response) -> "CachedAsset":
        return cls(
            content=bytes(response.content),
            headers=dict(response.headers),
            status_code=int(response.status_code),
            url=str(response.url),
        )


def _asset_size(asset: CachedAsset) -> int:
    return asset.size


class AssetCache(Protocol):
    """Narrow interface the image path depends on."""

    def lookup(self, key: CacheKey) -> CachedAsset | None:
        """Return the stored asset for `key`, or None on a miss."""
        ...

    def store(self, key: CacheKey, asset: CachedAsset) -> None:
        """Persist `asset` under `key`."""
        ...


class MemoryAssetCache:
    """Thread-safe in-memory LRU bounded by entries and bytes.

    Storage and byte-weighted eviction are delegated to `cachetools`
    (`TTLCache` when a time-to-live is configured, `LRUCache` otherwise).
    cachetools is not thread-safe, so every access goes through one lock.
    """

    def __init__(
        self,
        *,
        max_entries: int = 256,
        max_bytes: int = 50 * 1024 * 1024,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = monotonic,
    ) -> None:
        if int(max_entries) <= 0:
            raise ValueError("max_entries must be a positive integer.")
        if int(max_bytes) <= 0:
            raise ValueError("max_bytes must be a positive integer.")
        self.max_entries = int(max_entries)
        self.max_bytes = int(max_bytes)
        self.ttl_seconds = float(ttl_seconds) if ttl_seconds else None
        self._clock = clock
        self._entries: Cache[CacheKey, CachedAsset]
        if self.ttl_seconds is None:
            self._entries = LRUCache(maxsize=self.max_bytes, getsizeof=_asset_size)
        else:
            self._entries = TTLCache(
                maxsize=self.max_bytes,
                ttl=self.ttl_seconds,
                timer=clock,
                getsizeof=_asset_size,
            )
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            self._expire()
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    @property
    def total_bytes(self) -> int:
        with self._lock:
            self._expire()
            return int(self._entries.currsize)

    def lookup(self, key: CacheKey) -> CachedAsset | None:
        with self._lock:
            self._expire()
            return self._entries.get(key)

    def store(self, key: CacheKey, asset: CachedAsset) -> None:
        if asset.size > self.max_bytes:
            log.debug("Asset larger than cache capacity; not stored url={} size={}", key.url, asset.size)
            return
        asset.stored_at = self._clock()
        with self._lock:
            self._entries[key] = asset
            while len(self._entries) > self.max_entries:
                evicted, dropped = self._entries.popitem()
                log.debug("Evicted cache entry url={} size={}", evicted.url, dropped.size)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def _expire(self) -> None:
        if isinstance(self._entries, TTLCache):
            self._entries.expire()


def build_asset_cache(*, settings: Settings | None = None) -> MemoryAssetCache:
    """Factory for the default in-memory image cache."""

    s = settings or get_settings()
    return MemoryAssetCache(
        max_entries=s.image_cache_max_entries,
        max_bytes=s.image_cache_max_bytes,
        ttl_seconds=s.image_cache_ttl_seconds,
    )
