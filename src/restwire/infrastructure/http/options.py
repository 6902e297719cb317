# Copyright (c) Restwire.
# SPDX-License-Identifier: MIT
"""Per-call request options."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from restwire.types import HeaderMap


@dataclass(frozen=True, slots=True)
class RequestOptions:
    """Configuration for a single controller call.

    Attributes:
        expected_status_code: Status the response must carry. ``None`` accepts
            any status, including 4xx/5xx.
        headers: Extra request headers. Header-generator output and the
            JSON ``Content-Type`` take precedence over these.
        timeout_s: Timeout in seconds for this call. ``None`` uses the
            controller default (60 s unless configured otherwise).
    """

    expected_status_code: int | None = None
    headers: HeaderMap | None = field(default=None)
    timeout_s: float | None = None

    def __post_init__(self) -> None:
        if self.timeout_s is not None and self.timeout_s <= 0:
            raise ValueError(f"timeout_s must be positive, got {self.timeout_s!r}")

    @classmethod
    def expect(cls, status_code: int, **kwargs: Any) -> RequestOptions:
        """Shorthand for options that require ``status_code``."""
        return cls(expected_status_code=status_code, **kwargs)
