# Copyright (c) Restwire.
# SPDX-License-Identifier: MIT
"""Domain layer: the JSON value model, error taxonomy and capability ports."""
