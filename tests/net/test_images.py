from __future__ import annotations

import httpx
import pytest

from cocktailnet.net.cache import CachedAsset, CacheKey, MemoryAssetCache
from cocktailnet.net.errors import UnknownResponseError
from cocktailnet.net.images import ImageCacheGate, decode_image

IMAGE_URL = "https://img.example.com/drink.png"


def test_decode_image_loads_pixels(png_bytes: bytes) -> None:
    image = decode_image(png_bytes)
    assert image.size == (4, 3)
    assert image.format == "PNG"


@pytest.mark.parametrize("payload", [b"", b"definitely not an image"])
def test_decode_image_failures_are_unknown(payload: bytes) -> None:
    with pytest.raises(UnknownResponseError):
        decode_image(payload)


def test_admit_stores_bytes_and_headers(png_bytes: bytes) -> None:
    cache = MemoryAssetCache()
    gate = ImageCacheGate(cache)
    request = httpx.Request("GET", IMAGE_URL)
    response = httpx.Response(200, content=png_bytes, headers={"Content-Type": "image/png"}, request=request)

    image = gate.admit(request, response)

    assert image.size == (4, 3)
    asset = cache.lookup(CacheKey.for_request(request))
    assert asset is not None
    assert asset.content == png_bytes
    assert asset.headers["content-type"] == "image/png"
    assert gate.cached_image(request) is not None


def test_admit_does_not_store_undecodable_payload() -> None:
    cache = MemoryAssetCache()
    gate = ImageCacheGate(cache)
    request = httpx.Request("GET", IMAGE_URL)
    response = httpx.Response(200, content=b"<html></html>", request=request)

    with pytest.raises(UnknownResponseError):
        gate.admit(request, response)
    assert len(cache) == 0


def test_corrupt_cache_entry_counts_as_miss() -> None:
    cache = MemoryAssetCache()
    request = httpx.Request("GET", IMAGE_URL)
    cache.store(CacheKey.for_request(request), CachedAsset(content=b"garbage"))

    assert ImageCacheGate(cache).cached_image(request) is None


def test_broken_png_chunk_is_unknown(png_bytes: bytes) -> None:
    # Pillow reports a corrupt chunk type after the image data as SyntaxError.
    broken = png_bytes.replace(b"IEND", b"\xd6END")
    with pytest.raises(UnknownResponseError):
        decode_image(broken)


def test_broken_cache_entry_is_a_miss_not_an_error(png_bytes: bytes) -> None:
    cache = MemoryAssetCache()
    request = httpx.Request("GET", IMAGE_URL)
    cache.store(CacheKey.for_request(request), CachedAsset(content=png_bytes.replace(b"IEND", b"\xd6END")))

    assert ImageCacheGate(cache).cached_image(request) is None
