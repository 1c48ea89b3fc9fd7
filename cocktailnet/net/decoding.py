"""Decode response bytes into a caller-declared type via pydantic."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, TypeVar, cast

from pydantic import TypeAdapter, ValidationError

from cocktailnet.net.errors import DecodingError

T = TypeVar("T")

__all__ = ["ResponseDecoder"]

_MAX_REPORTED_ERRORS = 3


@lru_cache(maxsize=128)
def _cached_adapter(result_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(result_type)


def _adapter_for(result_type: Any) -> TypeAdapter[Any]:
    try:
        return _cached_adapter(result_type)
    except TypeError:
        # Unhashable annotations cannot be memoised.
        return TypeAdapter(result_type)


def _summarise(exc: ValidationError) -> str:
    parts: list[str] = []
    for item in exc.errors()[:_MAX_REPORTED_ERRORS]:
        loc = ".".join(str(p) for p in item.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {item.get('msg', 'invalid')}")
    extra = exc.error_count() - len(parts)
    if extra > 0:
        parts.append(f"(+{extra} more)")
    return "; ".join(parts)


class ResponseDecoder:
    """Structural JSON decoder, generic over the expected result type."""

    def prepare(self, result_type: Any) -> None:
        """Build (and memoise) the validator for `result_type` up front.

        Raises:
            PydanticSchemaGenerationError: pydantic cannot validate this type.
        """
        _adapter_for(result_type)

    def decode(self, data: bytes, result_type: type[T]) -> T:
        """Validate `data` as JSON against `result_type`.

        Raises:
            DecodingError: The body is not JSON or does not match the schema.
        """
        adapter = _adapter_for(result_type)
        try:
            return cast(T, adapter.validate_json(data))
        except ValidationError as exc:
            name = getattr(result_type, "__name__", repr(result_type))
            raise DecodingError(f"Could not decode {name}: {_summarise(exc)}") from exc
