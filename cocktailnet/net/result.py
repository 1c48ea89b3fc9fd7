"""Success/failure outcome passed to completion callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, NoReturn, TypeVar, Union

from cocktailnet.net.errors import NetworkError

T = TypeVar("T")

__all__ = ["Completion", "Failure", "Result", "Success"]


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    """Decoded value delivered on success."""

    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Failure:
    """Typed error delivered on failure."""

    error: NetworkError

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        """Re-raise the carried error."""
        raise self.error


Result = Union[Success[T], Failure]
Completion = Callable[[Result[T]], None]
