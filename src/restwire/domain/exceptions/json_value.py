# Copyright (c) Restwire.
# SPDX-License-Identifier: MIT
"""
JSON value model exceptions.

Purpose:
    Errors raised while building a :class:`~restwire.domain.json_value.JSONValue`
    from bytes or while serializing one back to bytes. Navigation and scalar
    projection never raise; only the byte boundary does.

Layer:
    domain/exceptions
"""

from __future__ import annotations

from restwire.domain.exceptions.base import RestwireError


class JSONValueError(RestwireError, ValueError):
    """Base class for JSON value model errors."""

    code = "JSON_VALUE_ERROR"


class JSONParseError(JSONValueError):
    """Raised when bytes are not a valid JSON document."""

    code = "JSON_PARSE_ERROR"


class JSONShapeError(JSONValueError):
    """Raised when a parsed document is not an object or an array at the top level."""

    code = "JSON_SHAPE_ERROR"


class JSONEncodeError(JSONValueError):
    """Raised when a payload tree cannot be encoded as JSON."""

    code = "JSON_ENCODE_ERROR"
