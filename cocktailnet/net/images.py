"""Cache gate for image downloads.

The gate sits between the network client and an `AssetCache`:

- `cached_image` answers from the cache without touching the network; an
  entry whose bytes no longer decode counts as a miss.
- `admit` decodes freshly downloaded bytes and only then stores them, so a
  failed download or an undecodable payload never creates an entry.
"""

from __future__ import annotations

import struct
from io import BytesIO

import httpx
from loguru import logger
from PIL import Image, UnidentifiedImageError

from cocktailnet.net.cache import AssetCache, CachedAsset, CacheKey
from cocktailnet.net.errors import UnknownResponseError

log = logger.bind(module="net.images")

__all__ = ["ImageCacheGate", "decode_image"]

# Corrupt payloads surface from Pillow plugins as any of these.
_DECODE_ERRORS: tuple[type[BaseException], ...] = (
    UnidentifiedImageError,
    Image.DecompressionBombError,
    OSError,
    ValueError,
    SyntaxError,
    EOFError,
    IndexError,
    struct.error,
)


def decode_image(data: bytes) -> Image.Image:
    """Decode raw bytes into a fully loaded Pillow image.

    Raises:
        UnknownResponseError: The bytes are empty or not a readable image.
    """
    if not data:
        raise UnknownResponseError("Image response body was empty.")
    try:
        image = Image.open(BytesIO(data))
        image.load()
    except _DECODE_ERRORS as exc:
        raise UnknownResponseError(f"Image bytes could not be decoded: {exc}") from exc
    return image


class ImageCacheGate:
    """Check the content cache before, and populate it after, an image fetch."""

    def __init__(self, cache: AssetCache) -> None:
        self.cache = cache

    def cached_image(self, request: httpx.Request) -> Image.Image | None:
        key = CacheKey.for_request(request)
        asset = self.cache.lookup(key)
        if asset is None:
            return None
        try:
            image = decode_image(asset.content)
        except UnknownResponseError as exc:
            log.warning("Ignoring undecodable cache entry url={}: {}", key.url, exc)
            return None
        log.debug("Image cache hit url={}", key.url)
        return image

    def admit(self, request: httpx.Request, response: httpx.Response) -> Image.Image:
        """Decode `response` and store its bytes under `request`'s key."""
        image = decode_image(response.content)
        self.cache.store(CacheKey.for_request(request), CachedAsset.from_response(response))
        return image
