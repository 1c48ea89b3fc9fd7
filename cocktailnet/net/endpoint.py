"""Immutable descriptors for a single API call.

An `Endpoint` carries the base address, relative path, HTTP method and a task
variant describing how (if at all) parameters travel with the request:

- `Plain`: no parameters, JSON content type, empty body.
- `Parameterized`: parameters appended to the URL query string.
- `ParameterizedBody`: parameters serialised as a JSON body.

No validation happens here; malformed addresses surface when the request
builder assembles the URL.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Union

__all__ = [
    "Endpoint",
    "HTTPMethod",
    "HTTPTask",
    "Parameterized",
    "ParameterizedBody",
    "Parameters",
    "Plain",
]

Parameters = Mapping[str, Any]


class HTTPMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"


def _freeze(parameters: Parameters | None) -> Parameters:
    return MappingProxyType(dict(parameters or {}))


@dataclass(frozen=True, slots=True)
class Plain:
    """Request without parameters."""


@dataclass(frozen=True, slots=True)
class Parameterized:
    """Request whose parameters are encoded into the query string."""

    parameters: Parameters = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", _freeze(self.parameters))


@dataclass(frozen=True, slots=True)
class ParameterizedBody:
    """Request whose parameters are serialised as a JSON body."""

    parameters: Parameters = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", _freeze(self.parameters))


HTTPTask = Union[Plain, Parameterized, ParameterizedBody]


@dataclass(frozen=True, slots=True)
class Endpoint:
    """Description of one API call."""

    base_url: str
    path: str
    method: HTTPMethod = HTTPMethod.GET
    task: HTTPTask = field(default_factory=Plain)
