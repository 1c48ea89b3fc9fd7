"""Parameter encoders that mutate an in-progress request.

Each task kind maps to exactly one encoder:

- `Parameterized` -> `URLParameterEncoder` (query string).
- `ParameterizedBody` -> `JSONParameterEncoder` (JSON body).

Encoders raise `ParameterEncodingError` and never touch global state.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx

from cocktailnet.net.endpoint import Parameters
from cocktailnet.net.errors import ParameterEncodingError

__all__ = [
    "JSON_CONTENT_TYPE",
    "JSONParameterEncoder",
    "ParameterEncoder",
    "RequestDraft",
    "URLParameterEncoder",
]

JSON_CONTENT_TYPE = "application/json"

_QUERY_SCALARS = (str, int, float, bool, type(None))


@dataclass(slots=True)
class RequestDraft:
    """Mutable request under construction, finalised into an `httpx.Request`."""

    method: str
    url: httpx.URL | None
    headers: dict[str, str] = field(default_factory=dict)
    content: bytes | None = None

    def to_request(self, *, timeout_seconds: float) -> httpx.Request:
        if self.url is None:
            raise ParameterEncodingError("Cannot finalise a request without a URL.")
        return httpx.Request(
            self.method,
            self.url,
            headers=self.headers,
            content=self.content,
            extensions={"timeout": httpx.Timeout(timeout_seconds).as_dict()},
        )


class ParameterEncoder(Protocol):
    def encode(self, draft: RequestDraft, parameters: Parameters) -> None:
        """Apply `parameters` to `draft` in place."""
        ...


def _check_query_value(key: str, value: Any) -> None:
    if isinstance(value, (list, tuple)):
        for item in value:
            if not isinstance(item, _QUERY_SCALARS):
                raise ParameterEncodingError(
                    f"Unsupported query parameter item for {key!r}: {type(item).__name__}",
                )
        return
    if not isinstance(value, _QUERY_SCALARS):
        raise ParameterEncodingError(
            f"Unsupported query parameter value for {key!r}: {type(value).__name__}",
        )


class URLParameterEncoder:
    """Append parameters to the request's existing query string."""

    def encode(self, draft: RequestDraft, parameters: Parameters) -> None:
        if draft.url is None:
            raise ParameterEncodingError("URL is missing; cannot encode query parameters.")
        if not parameters:
            return
        for key, value in parameters.items():
            if not isinstance(key, str) or not key:
                raise ParameterEncodingError(f"Query parameter keys must be non-empty strings: {key!r}")
            _check_query_value(key, value)
        try:
            draft.url = draft.url.copy_merge_params(dict(parameters))
        except (TypeError, ValueError, httpx.InvalidURL) as exc:
            raise ParameterEncodingError(f"Query parameter encoding failed: {exc}") from exc


class JSONParameterEncoder:
    """Serialise parameters as a JSON object body."""

    def encode(self, draft: RequestDraft, parameters: Parameters) -> None:
        if draft.url is None:
            raise ParameterEncodingError("URL is missing; cannot encode body parameters.")
        try:
            body = json.dumps(dict(parameters), allow_nan=False, separators=(",", ":"))
        except (TypeError, ValueError) as exc:
            raise ParameterEncodingError(f"JSON parameter encoding failed: {exc}") from exc
        draft.content = body.encode("utf-8")
        draft.headers["Content-Type"] = JSON_CONTENT_TYPE
