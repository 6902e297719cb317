# Copyright (c) Restwire.
# SPDX-License-Identifier: MIT
"""
Response containers.

Purpose:
    Transport-agnostic view of an HTTP response (status line and headers) and
    the ``(value, response)`` pair returned by every controller verb.

Layer:
    domain

Notes:
    - Header names are normalized to lowercase; repeated headers are folded
      into one comma-separated value by the transport adapter.
    - Bodies are not part of the metadata. Errors that need the body carry it
      alongside the metadata instead.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import NamedTuple


@dataclass(frozen=True, slots=True)
class ResponseMetadata:
    """Status line and headers of a completed HTTP exchange."""

    status_code: int
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    reason_phrase: str = ""
    http_version: str = "HTTP/1.1"
    elapsed_s: float | None = None

    def header(self, name: str, default: str | None = None) -> str | None:
        """Return a header value by case-insensitive name."""
        return self.headers.get(name.lower(), default)

    @property
    def content_type(self) -> str | None:
        """Return the ``Content-Type`` header, if any."""
        return self.header("content-type")

    @property
    def is_success(self) -> bool:
        """Return True for 2xx status codes."""
        return 200 <= self.status_code < 300


class RestResult[T](NamedTuple):
    """Deserialized value plus the response it came from."""

    value: T
    response: ResponseMetadata
