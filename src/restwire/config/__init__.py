# Copyright (c) Restwire.
# SPDX-License-Identifier: MIT
"""Configuration package."""

from __future__ import annotations

from restwire.config.settings import RestSettings, get_settings

__all__ = ["RestSettings", "get_settings"]
