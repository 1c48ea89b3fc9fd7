"""Network client: build, dispatch and decode requests with callback delivery.

Two operations make up the public surface:

- `request(endpoint, result_type, completion)` fetches JSON and decodes it
  into `result_type`.
- `request_image(url, completion)` fetches an image through the cache gate.

Both return immediately with a `concurrent.futures.Future` that settles once
the completion has run. The completion is invoked exactly once with either a
`Success` or a `Failure`. Construction failures, invalid image URLs and image
cache hits are delivered synchronously on the caller's thread; everything
else runs on the client's worker pool.

Notes:
    - The shared `httpx.Client` is the only shared transport resource. It
      supports concurrent in-flight requests, so no extra locking is added here.
    - There is no cancellation, retry or back-pressure beyond the pool size and
      the per-request timeout. This is an explicit simplification.
    - `EndpointConfigurationError` is raised to the caller instead of being
      delivered to the completion: it signals a build-time defect.
"""

from __future__ import annotations

import weakref
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Callable, TypeVar

import httpx
from loguru import logger
from PIL import Image

from cocktailnet.config import Settings, get_settings, resolve_api_key
from cocktailnet.errors import ConfigurationError
from cocktailnet.net.cache import AssetCache, build_asset_cache
from cocktailnet.net.decoding import ResponseDecoder
from cocktailnet.net.endpoint import Endpoint
from cocktailnet.net.errors import (
    DecodingError,
    MissingURLError,
    NetworkError,
    TransportError,
    UnknownResponseError,
)
from cocktailnet.net.images import ImageCacheGate
from cocktailnet.net.request import RequestBuilder, is_http_url
from cocktailnet.net.result import Completion, Failure, Result, Success

T = TypeVar("T")

log = logger.bind(module="net.client")

__all__ = ["NetworkClient"]

_MAX_ERROR_TEXT_CHARS = 512


def _truncate(text: str, *, limit: int) -> str:
    """Return a truncated string with an ellipsis when needed."""
    if limit <= 0:
        return ""
    if len(text) <= limit:
        return text
    head = text[: max(0, limit - 3)].rstrip()
    return f"{head}..."


def _safe_response_text(response: httpx.Response) -> str:
    """Best-effort extraction of response text for error messages."""
    try:
        text = (response.text or "").strip()
    except (UnicodeDecodeError, LookupError):
        text = response.content.decode("utf-8", errors="replace").strip()
    return _truncate(text, limit=_MAX_ERROR_TEXT_CHARS)


def _shutdown(session: httpx.Client, executor: Executor | None) -> None:
    if executor is not None:
        executor.shutdown(wait=True)
    session.close()


def _completed() -> Future[None]:
    future: Future[None] = Future()
    future.set_result(None)
    return future


class NetworkClient:
    """JSON and image client sharing one session, worker pool and image cache."""

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        api_key: str | None = None,
        transport: httpx.BaseTransport | None = None,
        cache: AssetCache | None = None,
        executor: Executor | None = None,
        follow_redirects: bool = True,
    ) -> None:
        self.settings = settings or get_settings()
        key = api_key if api_key is not None else resolve_api_key(self.settings)
        key = (key or "").strip()
        if not key:
            raise ConfigurationError("API key must be a non-empty string.")
        self.api_key = key
        self.timeout_seconds = float(self.settings.http_timeout_seconds)

        self._builder = RequestBuilder(
            timeout_seconds=self.timeout_seconds,
            user_agent=self.settings.http_user_agent,
        )
        self._decoder = ResponseDecoder()
        self._images = ImageCacheGate(cache if cache is not None else build_asset_cache(settings=self.settings))

        kwargs: dict[str, object] = {
            "timeout": self.timeout_seconds,
            "follow_redirects": bool(follow_redirects),
        }
        if transport is not None:
            kwargs["transport"] = transport
        self._session = httpx.Client(**kwargs)  # type: ignore[arg-type]

        owned = executor is None
        self._executor: Executor = executor or ThreadPoolExecutor(
            max_workers=self.settings.http_max_workers,
            thread_name_prefix="cocktailnet-http",
        )
        # Release the pool and session even if callers forget to close explicitly.
        self._finalizer = weakref.finalize(
            self,
            _shutdown,
            self._session,
            self._executor if owned else None,
        )

    @property
    def cache(self) -> AssetCache:
        return self._images.cache

    def close(self) -> None:
        """Wait for owned in-flight work, then close the pool and session."""
        if self._finalizer.alive:
            self._finalizer()

    def __enter__(self) -> "NetworkClient":
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.close()

    # Public surface ---------------------------------------------------

    def request(
        self,
        endpoint: Endpoint,
        result_type: type[T],
        completion: Completion[T],
    ) -> Future[None]:
        """Fetch `endpoint` and deliver the body decoded as `result_type`.

        Raises:
            EndpointConfigurationError: The endpoint's base URL is unusable.
            PydanticSchemaGenerationError: `result_type` cannot be validated.
        """
        self._decoder.prepare(result_type)
        try:
            request = self._builder.build(endpoint, self.api_key)
        except NetworkError as exc:
            log.warning("Request construction failed path={!r}: {}", endpoint.path, exc)
            return self._deliver_now(completion, Failure(exc))

        log.debug("Dispatching {} {}", request.method, self._redact(request.url))
        return self._executor.submit(self._run, completion, self._fetch_json, request, result_type)

    def request_image(
        self,
        url: str,
        completion: Completion[Image.Image],
    ) -> Future[None]:
        """Fetch an image, serving it from the content cache when possible."""
        try:
            request = self._image_request(url)
        except MissingURLError as exc:
            log.warning("Image request rejected url={!r}: {}", url, exc)
            return self._deliver_now(completion, Failure(exc))

        cached = self._images.cached_image(request)
        if cached is not None:
            return self._deliver_now(completion, Success(cached))

        log.debug("Image cache miss; downloading {}", request.url)
        return self._executor.submit(self._run, completion, self._fetch_image, request)

    # Internal helpers -------------------------------------------------

    @staticmethod
    def _deliver_now(completion: Completion[Any], result: Result[Any]) -> Future[None]:
        completion(result)
        return _completed()

    @staticmethod
    def _run(
        completion: Completion[Any],
        operation: Callable[..., Result[Any]],
        *args: Any,
    ) -> None:
        try:
            result = operation(*args)
        except Exception as exc:
            log.exception("Unexpected failure in {}", getattr(operation, "__name__", operation))
            result = Failure(UnknownResponseError(f"Unexpected error: {exc!r}"))
        completion(result)

    def _redact(self, url: httpx.URL) -> str:
        return str(url).replace(f"/{self.api_key}/", "/***/", 1)

    def _image_request(self, url: str) -> httpx.Request:
        value = (url or "").strip()
        if not value:
            raise MissingURLError("Image URL is empty.")
        try:
            parsed = httpx.URL(value)
        except httpx.InvalidURL as exc:
            raise MissingURLError(f"Image URL could not be parsed: {value!r}") from exc
        if not is_http_url(parsed):
            raise MissingURLError(f"Image URL must be an absolute http(s) URL: {value!r}")

        headers: dict[str, str] = {}
        if self.settings.http_user_agent:
            headers["User-Agent"] = self.settings.http_user_agent
        return httpx.Request(
            "GET",
            parsed,
            headers=headers,
            extensions={"timeout": httpx.Timeout(self.timeout_seconds).as_dict()},
        )

    def _send(self, request: httpx.Request) -> httpx.Response:
        """Send `request` and return a 2xx response.

        A 4xx/5xx status is a `TransportError` carrying the status code rather
        than a body handed to the decoder, so error pages are never decoded
        as JSON nor cached as images.

        Raises:
            TransportError: The request failed or returned a 4xx/5xx response.
        """
        try:
            response = self._session.send(request)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as exc:
            message = _safe_response_text(exc.response) or "HTTP request failed"
            raise TransportError(message, status_code=int(exc.response.status_code)) from exc
        except httpx.RequestError as exc:
            raise TransportError(f"HTTP request failed: {exc}") from exc

    def _fetch_json(self, request: httpx.Request, result_type: type[T]) -> Result[T]:
        try:
            response = self._send(request)
        except TransportError as exc:
            log.warning("Transport failed for {}: {}", self._redact(request.url), exc)
            return Failure(exc)

        if not response.content:
            log.warning("Empty response body from {}", self._redact(request.url))
            return Failure(UnknownResponseError())

        try:
            value = self._decoder.decode(response.content, result_type)
        except DecodingError as exc:
            log.warning("Decoding failed for {}: {}", self._redact(request.url), exc)
            return Failure(exc)
        return Success(value)

    def _fetch_image(self, request: httpx.Request) -> Result[Image.Image]:
        try:
            response = self._send(request)
        except TransportError as exc:
            log.warning("Image download failed for {}: {}", request.url, exc)
            return Failure(exc)

        try:
            image = self._images.admit(request, response)
        except UnknownResponseError as exc:
            log.warning("Image decode failed for {}: {}", request.url, exc)
            return Failure(exc)
        return Success(image)
