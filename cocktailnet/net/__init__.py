"""Networking core: endpoint descriptors, request building, decoding and image caching."""

from __future__ import annotations

from cocktailnet.net.cache import AssetCache, CachedAsset, CacheKey, MemoryAssetCache
from cocktailnet.net.client import NetworkClient
from cocktailnet.net.endpoint import Endpoint, HTTPMethod, Parameterized, ParameterizedBody, Plain
from cocktailnet.net.errors import (
    ConfigurationError,
    DecodingError,
    EndpointConfigurationError,
    MissingURLError,
    NetworkError,
    NetworkErrorKind,
    ParameterEncodingError,
    TransportError,
    UnknownResponseError,
)
from cocktailnet.net.result import Failure, Result, Success

__all__ = [
    "AssetCache",
    "CacheKey",
    "CachedAsset",
    "ConfigurationError",
    "DecodingError",
    "Endpoint",
    "EndpointConfigurationError",
    "Failure",
    "HTTPMethod",
    "MemoryAssetCache",
    "MissingURLError",
    "NetworkClient",
    "NetworkError",
    "NetworkErrorKind",
    "ParameterEncodingError",
    "Parameterized",
    "ParameterizedBody",
    "Plain",
    "Result",
    "Success",
    "TransportError",
    "UnknownResponseError",
]
