"""Error taxonomy for the networking core.

Per-call failures derive from `NetworkError` and are always delivered through
a completion callback as a `Failure`. Configuration defects derive from
`ConfigurationError` instead: they are raised synchronously to whoever built
the client or endpoint and never reach a completion.
"""

from __future__ import annotations

from enum import Enum

from cocktailnet.errors import ConfigurationError

__all__ = [
    "ConfigurationError",
    "DecodingError",
    "EndpointConfigurationError",
    "MissingURLError",
    "NetworkError",
    "NetworkErrorKind",
    "ParameterEncodingError",
    "TransportError",
    "UnknownResponseError",
]


class NetworkErrorKind(str, Enum):
    """Tag identifying which branch of the taxonomy a failure belongs to."""

    MISSING_URL = "missing_url"
    PARAMETER_ENCODING_FAILED = "parameter_encoding_failed"
    UNKNOWN = "unknown"
    TRANSPORT = "transport"
    DECODING = "decoding"


class NetworkError(RuntimeError):
    """Base class for failures reported to a completion callback."""

    kind: NetworkErrorKind = NetworkErrorKind.UNKNOWN
    default_message: str = "Network request failed."

    def __init__(self, message: str | None = None, *, status_code: int | None = None) -> None:
        text = str(message) if message else self.default_message
        super().__init__(text)
        self.message = text
        self.status_code = int(status_code) if status_code is not None else None

    def __str__(self) -> str:  # pragma: no cover - trivial
        if self.status_code is None:
            return self.message
        return f"{self.message} (status={self.status_code})"


class MissingURLError(NetworkError):
    """Raised when a request address cannot be parsed or assembled."""

    kind = NetworkErrorKind.MISSING_URL
    default_message = "URL is missing or invalid."


class ParameterEncodingError(NetworkError):
    """Raised when request parameters cannot be serialised."""

    kind = NetworkErrorKind.PARAMETER_ENCODING_FAILED
    default_message = "Parameter encoding failed."


class UnknownResponseError(NetworkError):
    """Raised when the transport succeeded but yielded no usable body."""

    kind = NetworkErrorKind.UNKNOWN
    default_message = "Response contained no usable body."


class TransportError(NetworkError):
    """Wraps an underlying `httpx` failure (connectivity, timeout, HTTP status)."""

    kind = NetworkErrorKind.TRANSPORT
    default_message = "HTTP transport failed."


class DecodingError(NetworkError):
    """Raised when a response body does not conform to the expected schema."""

    kind = NetworkErrorKind.DECODING
    default_message = "Response body could not be decoded."


class EndpointConfigurationError(ConfigurationError):
    """Raised when an endpoint's base URL cannot form an address at all."""
