# Copyright (c) Restwire.
# SPDX-License-Identifier: MIT
"""Structured logging helpers."""

from __future__ import annotations

from restwire.infrastructure.logging.logger import (
    configure_root_logging,
    get_json_logger,
    request_context,
    set_request_context,
)

__all__ = [
    "configure_root_logging",
    "get_json_logger",
    "request_context",
    "set_request_context",
]
