# Copyright (c) Restwire.
# SPDX-License-Identifier: MIT
"""Infrastructure layer: httpx transport, deserializers, logging and observability."""
