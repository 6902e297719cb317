# Copyright (c) Restwire.
# SPDX-License-Identifier: MIT
"""Package version."""

__version__ = "0.1.0"
