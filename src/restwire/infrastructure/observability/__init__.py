# Copyright (c) Restwire.
# SPDX-License-Identifier: MIT
"""Metrics and tracing helpers for outbound calls."""
