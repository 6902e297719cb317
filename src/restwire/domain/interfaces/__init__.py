# Copyright (c) Restwire.
# SPDX-License-Identifier: MIT
"""Capability ports implemented by infrastructure adapters."""

from __future__ import annotations

from restwire.domain.interfaces.deserializer import Deserializer, ImageDecoder

__all__ = ["Deserializer", "ImageDecoder"]
