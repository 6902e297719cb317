# Copyright (c) Restwire.
# SPDX-License-Identifier: MIT
"""Project-wide JSON typing helpers.

These aliases model the raw payload held by :class:`restwire.JSONValue` and the
header mappings accepted across the request pipeline.
"""

from __future__ import annotations

from collections.abc import Mapping

type JsonPrimitive = None | bool | int | float | str
type JsonValue = JsonPrimitive | list[JsonValue] | dict[str, JsonValue]
type HeaderMap = Mapping[str, str]

__all__ = ["HeaderMap", "JsonPrimitive", "JsonValue"]
