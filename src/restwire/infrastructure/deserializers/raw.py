# Copyright (c) Restwire.
# SPDX-License-Identifier: MIT
"""Pass-through deserializers for bodies that need no parsing."""

from __future__ import annotations

from typing import Final

from restwire.domain.exceptions.networking import DeserializationError


class DataDeserializer:
    """Return the body bytes unchanged."""

    accept_header: Final[str] = "*/*"

    def deserialize(self, data: bytes) -> bytes:
        return data

    def __repr__(self) -> str:
        return "DataDeserializer()"


class VoidDeserializer:
    """Ignore the body; for endpoints that return nothing useful."""

    accept_header: Final[str] = "*/*"

    def deserialize(self, data: bytes) -> None:
        return None

    def __repr__(self) -> str:
        return "VoidDeserializer()"


class TextDeserializer:
    """Decode the body as text.

    Args:
        encoding: Codec used to decode the body.
        errors: Codec error policy; ``"strict"`` makes undecodable bodies fail.
    """

    accept_header: Final[str] = "text/plain"

    def __init__(self, encoding: str = "utf-8", *, errors: str = "strict") -> None:
        self._encoding = encoding
        self._errors = errors

    def deserialize(self, data: bytes) -> str:
        try:
            return data.decode(self._encoding, self._errors)
        except UnicodeDecodeError as exc:
            raise DeserializationError(
                f"Response is not valid {self._encoding} text.", data, exc
            ) from exc

    def __repr__(self) -> str:
        return f"TextDeserializer({self._encoding!r})"
