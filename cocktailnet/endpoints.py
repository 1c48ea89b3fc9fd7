"""Endpoint factories for TheCocktailDB API.

All endpoints are GET requests relative to the configured base URL; the API
key segment is inserted by the request builder.
"""

from __future__ import annotations

from cocktailnet.config import Settings, get_settings
from cocktailnet.net.endpoint import Endpoint, HTTPMethod, Parameterized, Plain

__all__ = [
    "filter_by_ingredient",
    "latest_drinks",
    "lookup_drink",
    "popular_drinks",
    "random_drink",
    "search_drinks",
]


def _base_url(settings: Settings | None) -> str:
    return (settings or get_settings()).api_base_url


def random_drink(*, settings: Settings | None = None) -> Endpoint:
    return Endpoint(_base_url(settings), "random.php", HTTPMethod.GET, Plain())


def latest_drinks(*, settings: Settings | None = None) -> Endpoint:
    return Endpoint(_base_url(settings), "latest.php", HTTPMethod.GET, Plain())


def popular_drinks(*, settings: Settings | None = None) -> Endpoint:
    return Endpoint(_base_url(settings), "popular.php", HTTPMethod.GET, Plain())


def search_drinks(name: str, *, settings: Settings | None = None) -> Endpoint:
    """Search drinks by (partial) name."""
    return Endpoint(_base_url(settings), "search.php", HTTPMethod.GET, Parameterized({"s": name}))


def lookup_drink(drink_id: str | int, *, settings: Settings | None = None) -> Endpoint:
    """Look up full drink details by id."""
    return Endpoint(_base_url(settings), "lookup.php", HTTPMethod.GET, Parameterized({"i": str(drink_id)}))


def filter_by_ingredient(ingredient: str, *, settings: Settings | None = None) -> Endpoint:
    return Endpoint(_base_url(settings), "filter.php", HTTPMethod.GET, Parameterized({"i": ingredient}))
