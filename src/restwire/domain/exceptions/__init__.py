# Copyright (c) Restwire.
# SPDX-License-Identifier: MIT
"""Domain exceptions.

Purpose:
    Group the error types raised by the JSON value model and the request
    pipeline:

    * json_value: parse/shape/encode failures of :class:`JSONValue`.
    * networking: transport, status and deserialization failures.
"""

from __future__ import annotations

from restwire.domain.exceptions.base import RestwireError
from restwire.domain.exceptions.json_value import (
    JSONEncodeError,
    JSONParseError,
    JSONShapeError,
    JSONValueError,
)
from restwire.domain.exceptions.networking import (
    BadResponse,
    DeserializationError,
    MalformedResponse,
    NetworkingError,
    TransportError,
    TransportTimeout,
    UnexpectedStatusCode,
)

__all__ = [
    "BadResponse",
    "DeserializationError",
    "JSONEncodeError",
    "JSONParseError",
    "JSONShapeError",
    "JSONValueError",
    "MalformedResponse",
    "NetworkingError",
    "RestwireError",
    "TransportError",
    "TransportTimeout",
    "UnexpectedStatusCode",
]
