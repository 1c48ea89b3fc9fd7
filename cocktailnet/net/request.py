"""Turn an `Endpoint` plus the configured API key into an `httpx.Request`.

Address layout: ``{base_url}/{api_key}/{path}``. A base URL that cannot form
an address at all is a configuration defect (`EndpointConfigurationError`);
an assembled address that fails to parse is a per-request `MissingURLError`.
"""

from __future__ import annotations

import httpx
from loguru import logger

from cocktailnet.net.encoding import (
    JSON_CONTENT_TYPE,
    JSONParameterEncoder,
    ParameterEncoder,
    RequestDraft,
    URLParameterEncoder,
)
from cocktailnet.net.endpoint import Endpoint, Parameterized, ParameterizedBody, Plain
from cocktailnet.net.errors import EndpointConfigurationError, MissingURLError

log = logger.bind(module="net.request")

__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "NO_CACHE_HEADERS",
    "RequestBuilder",
    "is_http_url",
    "validate_base_url",
]

DEFAULT_TIMEOUT_SECONDS = 10.0

# JSON responses are never served from a transport-level cache.
NO_CACHE_HEADERS: dict[str, str] = {
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}


def is_http_url(url: httpx.URL) -> bool:
    """Return True when `url` is absolute http(s) with a host."""
    return url.scheme in ("http", "https") and bool(url.host)


def validate_base_url(base_url: str) -> httpx.URL:
    """Parse a base URL or raise `EndpointConfigurationError`."""
    value = (base_url or "").strip()
    if not value:
        raise EndpointConfigurationError("Endpoint base URL is empty.")
    try:
        parsed = httpx.URL(value)
    except httpx.InvalidURL as exc:
        raise EndpointConfigurationError(f"Endpoint base URL could not be parsed: {value!r}") from exc
    if not is_http_url(parsed):
        raise EndpointConfigurationError(
            f"Endpoint base URL must be an absolute http(s) URL: {value!r}",
        )
    return parsed


class RequestBuilder:
    """Assemble transport requests from endpoint descriptors."""

    def __init__(
        self,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        user_agent: str | None = None,
        query_encoder: ParameterEncoder | None = None,
        body_encoder: ParameterEncoder | None = None,
    ) -> None:
        self.timeout_seconds = float(timeout_seconds)
        self.user_agent = (user_agent or "").strip() or None
        self.query_encoder: ParameterEncoder = query_encoder or URLParameterEncoder()
        self.body_encoder: ParameterEncoder = body_encoder or JSONParameterEncoder()

    def build(self, endpoint: Endpoint, api_key: str) -> httpx.Request:
        """Return a fully-formed request for `endpoint`.

        Raises:
            EndpointConfigurationError: The base URL cannot form an address.
            MissingURLError: The assembled address does not parse.
            ParameterEncodingError: Parameters could not be encoded.
        """
        try:
            validate_base_url(endpoint.base_url)
        except EndpointConfigurationError:
            log.critical("Endpoint is misconfigured base_url={!r} path={!r}", endpoint.base_url, endpoint.path)
            raise

        draft = RequestDraft(
            method=endpoint.method.value,
            url=self._assemble_url(endpoint, api_key),
            headers=dict(NO_CACHE_HEADERS),
        )
        if self.user_agent:
            draft.headers["User-Agent"] = self.user_agent

        task = endpoint.task
        if isinstance(task, Plain):
            draft.headers["Content-Type"] = JSON_CONTENT_TYPE
        elif isinstance(task, Parameterized):
            self.query_encoder.encode(draft, task.parameters)
        elif isinstance(task, ParameterizedBody):
            self.body_encoder.encode(draft, task.parameters)
        else:  # pragma: no cover - closed union
            raise TypeError(f"Unsupported endpoint task: {task!r}")

        return draft.to_request(timeout_seconds=self.timeout_seconds)

    @staticmethod
    def _assemble_url(endpoint: Endpoint, api_key: str) -> httpx.URL:
        base = endpoint.base_url.strip().rstrip("/")
        key = (api_key or "").strip().strip("/")
        path = (endpoint.path or "").strip().lstrip("/")
        segments = [base, key, path] if key else [base, path]
        raw = "/".join(segments)
        try:
            url = httpx.URL(raw)
        except httpx.InvalidURL as exc:
            raise MissingURLError(f"Could not assemble request URL: {exc}") from exc
        if not is_http_url(url):
            raise MissingURLError(f"Assembled request URL is not usable: {raw!r}")
        return url
