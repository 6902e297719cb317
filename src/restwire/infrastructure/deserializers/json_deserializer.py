# Copyright (c) Restwire.
# SPDX-License-Identifier: MIT
"""JSON deserializers.

Two strategies share the ``application/json`` Accept header:

* :class:`JSONDeserializer` parses into a navigable :class:`JSONValue` tree.
* :class:`DecodableDeserializer` validates the document against a caller
  chosen type (pydantic model, dataclass, TypedDict, ``list[int]`` ...) using
  a ``pydantic.TypeAdapter``.
"""

from __future__ import annotations

from typing import Any, Final

from pydantic import TypeAdapter, ValidationError

from restwire.domain.exceptions.networking import DeserializationError
from restwire.domain.json_value import JSONValue

_JSON: Final[str] = "application/json"


class JSONDeserializer:
    """Deserialize an object- or array-rooted JSON document into a ``JSONValue``."""

    accept_header: Final[str] = _JSON

    def deserialize(self, data: bytes) -> JSONValue:
        """Parse ``data``.

        Raises:
            JSONParseError: If the body is not JSON (including an empty body).
            JSONShapeError: If the body is a bare JSON scalar.
        """
        return JSONValue.from_bytes(data)

    def __repr__(self) -> str:
        return "JSONDeserializer()"


class DecodableDeserializer[T]:
    """Decode a JSON body into ``type_`` with pydantic validation.

    Args:
        type_: Target type. Anything ``pydantic.TypeAdapter`` accepts.
        strict: Disable pydantic's lax coercions (e.g. ``"2"`` -> ``2``).
    """

    accept_header: Final[str] = _JSON

    def __init__(self, type_: type[T] | Any, *, strict: bool = False) -> None:
        self._type = type_
        self._strict: bool | None = True if strict else None
        self._adapter: TypeAdapter[T] = TypeAdapter(type_)

    @property
    def target_type(self) -> Any:
        """Return the decode target type."""
        return self._type

    def deserialize(self, data: bytes) -> T:
        """Validate ``data`` against the target type.

        Raises:
            DeserializationError: Wrapping the ``pydantic.ValidationError``.
        """
        try:
            return self._adapter.validate_json(data, strict=self._strict)
        except ValidationError as exc:
            raise DeserializationError(
                f"Response does not match {_type_name(self._type)}: "
                f"{exc.error_count()} validation error(s)",
                data,
                exc,
            ) from exc

    def __repr__(self) -> str:
        return f"DecodableDeserializer({_type_name(self._type)})"


def _type_name(type_: Any) -> str:
    return getattr(type_, "__name__", None) or repr(type_)
