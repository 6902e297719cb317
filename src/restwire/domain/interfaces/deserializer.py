# Copyright (c) Restwire.
# SPDX-License-Identifier: MIT
"""Domain Interface: Deserializer Port.

Synopsis:
    Strategy that turns raw response bytes into a typed value and declares the
    ``Accept`` header it wants sent. The request pipeline is generic over this
    port, so a new response type is supported by implementing two members.

Layer:
    domain/interfaces
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Deserializer[T](Protocol):
    """Converts response bytes into ``T``.

    Implementations are stateless apart from configuration fixed at
    construction and may be shared between concurrent calls.
    """

    @property
    def accept_header(self) -> str:
        """Value of the ``Accept`` header sent with the request, e.g. ``application/json``."""
        ...

    def deserialize(self, data: bytes) -> T:
        """Deserialize the response body.

        Args:
            data: Raw response body (possibly empty).

        Returns:
            The deserialized value.

        Raises:
            Exception: Any failure; the pipeline wraps it as ``MalformedResponse``.
        """
        ...


class ImageDecoder[T](Protocol):
    """Platform image decoding capability used by the image deserializer."""

    def __call__(self, data: bytes) -> T:
        """Decode ``data`` into an image or raise if it is not one."""
        ...
