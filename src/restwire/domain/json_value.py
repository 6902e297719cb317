# Copyright (c) Restwire.
# SPDX-License-Identifier: MIT
"""JSON Value Model.

Purpose:
    Provide :class:`JSONValue`, an immutable node of a parsed JSON tree with
    total navigation: indexing into the wrong shape, a missing key or an
    out-of-range index yields :attr:`JSONValue.NULL` instead of raising. Scalar
    projections (``as_string()``, ``as_int()`` ...) return ``None`` when the
    node holds another type, so lookups chain without intermediate checks::

        body = JSONValue.from_bytes(data)
        name = body["json"]["key1"].as_string()

Layer:
    domain

Notes:
    - The payload is one of ``dict``, ``list``, ``str``, ``int``, ``float``,
      ``bool`` or ``None`` and is validated once, at construction. Children
      are wrapped lazily and share the parent's (never mutated) containers.
    - Booleans are never numbers here, even though ``bool`` subclasses
      ``int`` in Python: ``JSONValue(True).as_int()`` is ``None``.
    - Only the byte boundary raises (:meth:`from_bytes`, :meth:`to_bytes`).
"""

from __future__ import annotations

import copy
import json
import math
from collections.abc import Iterable, Iterator, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Final

from restwire.domain.exceptions.json_value import (
    JSONEncodeError,
    JSONParseError,
    JSONShapeError,
)
from restwire.types import JsonValue

__all__ = ["JSONKind", "JSONValue"]

_SEPARATORS: Final[tuple[str, str]] = (",", ":")


class JSONKind(str, Enum):
    """Shape of the payload held by a :class:`JSONValue`."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    NULL = "null"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _normalize(value: Any) -> JsonValue:
    """Validate a literal tree and return it as plain dict/list/scalar payload.

    Raises:
        TypeError: On keys that are not strings or leaves that are not JSON.
        ValueError: On NaN or infinite floats.
    """
    if isinstance(value, JSONValue):
        return value._value
    if value is None or isinstance(value, (str, bool, int)):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"JSON numbers must be finite, got {value!r}")
        return value
    if isinstance(value, Mapping):
        out: dict[str, JsonValue] = {}
        for key, child in value.items():
            if not isinstance(key, str):
                raise TypeError(f"JSON object keys must be str, got {type(key).__name__}")
            out[key] = _normalize(child)
        return out
    if isinstance(value, (list, tuple)):
        return [_normalize(child) for child in value]
    raise TypeError(f"{type(value).__name__} is not a JSON value")


def _equal(left: JsonValue, right: JsonValue) -> bool:
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    if _is_number(left) and _is_number(right):
        return left == right
    if isinstance(left, dict) and isinstance(right, dict):
        return left.keys() == right.keys() and all(_equal(v, right[k]) for k, v in left.items())
    if isinstance(left, list) and isinstance(right, list):
        return len(left) == len(right) and all(_equal(a, b) for a, b in zip(left, right))
    return type(left) is type(right) and left == right


def _freeze(value: JsonValue) -> Any:
    if isinstance(value, dict):
        return frozenset((k, _freeze(v)) for k, v in value.items())
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    return value


def _reject_constant(token: str) -> Any:
    # json.loads accepts NaN/Infinity by default; strict JSON does not.
    raise ValueError(f"invalid JSON constant {token!r}")


class JSONValue:
    """Immutable, safely navigable JSON node.

    Args:
        value: A JSON-compatible literal (``dict`` with ``str`` keys, ``list``
            or ``tuple``, ``str``, ``int``, ``float``, ``bool``, ``None``).
            Nested ``JSONValue`` instances are unwrapped.

    Raises:
        TypeError: If the literal contains a non-JSON leaf or a non-string key.
        ValueError: If the literal contains a non-finite float.
    """

    __slots__ = ("_value",)

    NULL: ClassVar[JSONValue]

    _value: JsonValue

    def __init__(self, value: Any = None) -> None:
        object.__setattr__(self, "_value", _normalize(value))

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #

    @classmethod
    def _wrap(cls, payload: JsonValue) -> JSONValue:
        """Wrap an already-validated payload without copying or re-checking it."""
        if payload is None:
            return cls.NULL
        node = cls.__new__(cls)
        object.__setattr__(node, "_value", payload)
        return node

    @classmethod
    def of(cls, value: Any) -> JSONValue:
        """Return ``value`` unchanged if it is a ``JSONValue``, else wrap it."""
        if isinstance(value, JSONValue):
            return value
        return cls(value)

    @classmethod
    def from_dict(cls, mapping: Mapping[str, Any] | None = None, **fields: Any) -> JSONValue:
        """Build an object node, typically for an outgoing request body.

        Keyword arguments are merged over ``mapping``.
        """
        merged: dict[str, Any] = dict(mapping or {})
        merged.update(fields)
        return cls(merged)

    @classmethod
    def from_list(cls, items: Iterable[Any] = ()) -> JSONValue:
        """Build an array node from any iterable of JSON literals."""
        return cls(list(items))

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> JSONValue:
        """Parse a JSON document whose top level is an object or an array.

        Args:
            data: Encoded JSON (UTF-8, UTF-16 or UTF-32 are detected).

        Returns:
            The root node.

        Raises:
            JSONParseError: If ``data`` is not a valid JSON document.
            JSONShapeError: If the document is a bare scalar.
        """
        raw = bytes(data)
        try:
            parsed = json.loads(raw, parse_constant=_reject_constant)
        except (ValueError, RecursionError) as exc:
            raise JSONParseError(
                f"Bytes are not a valid JSON document: {exc}",
                details={"size": len(raw)},
            ) from exc

        if not isinstance(parsed, (dict, list)):
            raise JSONShapeError(
                "JSON document must be an object or an array at the top level.",
                details={"type": type(parsed).__name__},
            )
        return cls._wrap(parsed)

    @classmethod
    def from_text(cls, text: str) -> JSONValue:
        """Parse a JSON document from text. See :meth:`from_bytes`."""
        return cls.from_bytes(text.encode("utf-8"))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # ------------------------------------------------------------------ #
    # Shape
    # ------------------------------------------------------------------ #

    @property
    def kind(self) -> JSONKind:
        """Return the shape of the payload."""
        value = self._value
        if value is None:
            return JSONKind.NULL
        if isinstance(value, dict):
            return JSONKind.OBJECT
        if isinstance(value, list):
            return JSONKind.ARRAY
        if isinstance(value, str):
            return JSONKind.STRING
        if isinstance(value, bool):
            return JSONKind.BOOL
        return JSONKind.NUMBER

    @property
    def is_null(self) -> bool:
        """Return True for JSON ``null`` (including every failed navigation)."""
        return self._value is None

    @property
    def raw(self) -> JsonValue:
        """Return a deep copy of the underlying payload."""
        return copy.deepcopy(self._value)

    # ------------------------------------------------------------------ #
    # Navigation
    # ------------------------------------------------------------------ #

    def field(self, key: str) -> JSONValue:
        """Return the child stored under ``key``, or ``NULL``."""
        value = self._value
        if isinstance(value, dict) and isinstance(key, str) and key in value:
            return self._wrap(value[key])
        return JSONValue.NULL

    def index(self, i: int) -> JSONValue:
        """Return the child at position ``i``, or ``NULL``.

        Negative positions are out of range; there is no wrap-around.
        """
        value = self._value
        if (
            isinstance(value, list)
            and isinstance(i, int)
            and not isinstance(i, bool)
            and 0 <= i < len(value)
        ):
            return self._wrap(value[i])
        return JSONValue.NULL

    def __getitem__(self, key: str | int) -> JSONValue:
        if isinstance(key, str):
            return self.field(key)
        if isinstance(key, int) and not isinstance(key, bool):
            return self.index(key)
        return JSONValue.NULL

    def at(self, *path: str | int) -> JSONValue:
        """Follow a sequence of keys and indices, e.g. ``at("json", "key5", 2)``."""
        node = self
        for step in path:
            node = node[step]
        return node

    def keys(self) -> tuple[str, ...]:
        """Return the object's keys in document order (empty for non-objects)."""
        if isinstance(self._value, dict):
            return tuple(self._value)
        return ()

    def iter_array(self) -> Iterable[JSONValue] | None:
        """Return a restartable iterable over array children, or ``None``.

        Each call to ``iter()`` on the result starts again from the first
        element.
        """
        value = self._value
        if not isinstance(value, list):
            return None
        return tuple(self._wrap(child) for child in value)

    def __iter__(self) -> Iterator[Any]:
        value = self._value
        if isinstance(value, list):
            return (self._wrap(child) for child in value)
        if isinstance(value, dict):
            return iter(tuple(value))
        return iter(())

    def __len__(self) -> int:
        if isinstance(self._value, (dict, list)):
            return len(self._value)
        return 0

    def __contains__(self, item: object) -> bool:
        value = self._value
        if isinstance(value, dict):
            return isinstance(item, str) and item in value
        if isinstance(value, list):
            try:
                needle = JSONValue.of(item)
            except (TypeError, ValueError):
                return False
            return any(_equal(child, needle._value) for child in value)
        return False

    # ------------------------------------------------------------------ #
    # Projections
    # ------------------------------------------------------------------ #

    def as_string(self) -> str | None:
        """Return the string payload, or ``None``."""
        value = self._value
        return value if isinstance(value, str) else None

    def as_number(self) -> int | float | None:
        """Return the numeric payload unchanged, or ``None``."""
        value = self._value
        return value if _is_number(value) else None  # type: ignore[return-value]

    def as_int(self) -> int | None:
        """Return the numeric payload as ``int`` (fraction truncated), or ``None``."""
        number = self.as_number()
        return int(number) if number is not None else None

    def as_float(self) -> float | None:
        """Return the numeric payload as ``float``, or ``None``."""
        number = self.as_number()
        return float(number) if number is not None else None

    def as_bool(self) -> bool | None:
        """Return the boolean payload, or ``None``."""
        value = self._value
        return value if isinstance(value, bool) else None

    def as_object(self) -> Mapping[str, JSONValue] | None:
        """Return a read-only mapping of wrapped children, or ``None``."""
        value = self._value
        if not isinstance(value, dict):
            return None
        return MappingProxyType({k: self._wrap(v) for k, v in value.items()})

    def as_array(self) -> tuple[JSONValue, ...] | None:
        """Return wrapped array children as a tuple, or ``None``."""
        children = self.iter_array()
        return tuple(children) if children is not None else None

    # ------------------------------------------------------------------ #
    # Serialization
    # ------------------------------------------------------------------ #

    def to_text(self) -> str:
        """Serialize to compact JSON text, preserving key order.

        Raises:
            JSONEncodeError: If the payload cannot be encoded.
        """
        try:
            return json.dumps(
                self._value,
                separators=_SEPARATORS,
                ensure_ascii=False,
                allow_nan=False,
            )
        except (TypeError, ValueError, RecursionError) as exc:
            raise JSONEncodeError(f"Value cannot be encoded as JSON: {exc}") from exc

    def to_bytes(self) -> bytes:
        """Serialize to compact UTF-8 JSON bytes. See :meth:`to_text`."""
        return self.to_text().encode("utf-8")

    # ------------------------------------------------------------------ #
    # Dunder protocol
    # ------------------------------------------------------------------ #

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JSONValue):
            return NotImplemented
        return _equal(self._value, other._value)

    def __hash__(self) -> int:
        return hash(_freeze(self._value))

    def __bool__(self) -> bool:
        return self._value is not None

    def __repr__(self) -> str:
        return f"JSONValue({self._value!r})"

    def __str__(self) -> str:
        return self.to_text()

    def __copy__(self) -> JSONValue:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> JSONValue:
        return self

    def __reduce__(self) -> tuple[Any, ...]:
        return (JSONValue, (self._value,))


_null = JSONValue.__new__(JSONValue)
object.__setattr__(_null, "_value", None)
JSONValue.NULL = _null
del _null
