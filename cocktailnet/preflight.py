"""Fast environment checks used by `script/doctor.py`.

Each check returns a `CheckResult` instead of raising so callers can render a
full report even when several things are misconfigured.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import httpx
from loguru import logger

from cocktailnet.config import PUBLIC_TEST_API_KEY, Settings, resolve_api_key
from cocktailnet.endpoints import random_drink
from cocktailnet.errors import ConfigurationError
from cocktailnet.models import DrinkList
from cocktailnet.net.cache import MemoryAssetCache
from cocktailnet.net.client import NetworkClient
from cocktailnet.net.request import validate_base_url
from cocktailnet.net.result import Failure, Result

log = logger.bind(module="preflight")

Status = Literal["ok", "warn", "fail"]

__all__ = [
    "CheckResult",
    "Status",
    "check_api_key",
    "check_api_reachable",
    "check_base_url",
]


@dataclass(slots=True)
class CheckResult:
    name: str
    status: Status
    details: str


def check_api_key(settings: Settings) -> CheckResult:
    try:
        key = resolve_api_key(settings)
    except ConfigurationError as exc:
        return CheckResult("api_key", "fail", str(exc))
    if key == PUBLIC_TEST_API_KEY:
        return CheckResult("api_key", "warn", "using the public test key '1'")
    return CheckResult("api_key", "ok", "configured")


def check_base_url(settings: Settings) -> CheckResult:
    try:
        url = validate_base_url(settings.api_base_url)
    except ConfigurationError as exc:
        return CheckResult("api_base_url", "fail", str(exc))
    if url.scheme != "https":
        return CheckResult("api_base_url", "warn", f"not using https: {url}")
    return CheckResult("api_base_url", "ok", str(url))


def check_api_reachable(
    settings: Settings,
    *,
    transport: httpx.BaseTransport | None = None,
) -> CheckResult:
    """Fetch a random drink through `NetworkClient` and report the outcome."""
    try:
        client = NetworkClient(
            settings=settings,
            transport=transport,
            cache=MemoryAssetCache(max_entries=1),
        )
    except ConfigurationError as exc:
        return CheckResult("api_reachable", "fail", f"client not configured ({exc})")

    outcome: list[Result[DrinkList]] = []
    with client:
        try:
            future = client.request(random_drink(settings=settings), DrinkList, outcome.append)
        except ConfigurationError as exc:
            return CheckResult("api_reachable", "fail", str(exc))
        # The per-request timeout bounds this wait.
        future.result()

    result = outcome[0]
    if isinstance(result, Failure):
        log.warning("API probe failed: {}", result.error)
        return CheckResult("api_reachable", "fail", str(result.error))
    drinks = result.unwrap().drinks
    if not drinks:
        return CheckResult("api_reachable", "warn", "reachable but returned no drinks")
    return CheckResult("api_reachable", "ok", f"random drink: {drinks[0].name}")
