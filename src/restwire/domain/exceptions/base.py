# Copyright (c) Restwire.
# SPDX-License-Identifier: MIT
"""
Base Exceptions.

Summary:
    Canonical base class for every error raised by restwire so callers can
    catch the whole family in one clause.

Layer:
    domain/exceptions
"""

from __future__ import annotations

from typing import Any


class RestwireError(Exception):
    """Base class for all restwire exceptions.

    Args:
        message: Human-readable error message.
        details: Optional machine-readable diagnostic payload.
    """

    code: str = "RESTWIRE_ERROR"

    def __init__(self, message: str = "", *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = details or {}

    def __str__(self) -> str:
        return self.message
