# Copyright (c) Restwire.
# SPDX-License-Identifier: MIT
"""OpenTelemetry span helper.

Provides a small async context manager ``traced(name, **attrs)`` that wraps an
operation in a span. Only the OpenTelemetry API is used; without an SDK
installed and configured by the application the spans are non-recording and
cost next to nothing.

Layer:
    infrastructure/observability
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Span, Status, StatusCode

_tracer = trace.get_tracer("restwire")


@asynccontextmanager
async def traced(span_name: str, **attrs: Any) -> AsyncIterator[Span]:
    """Open a span named ``span_name`` for the duration of the block.

    Args:
        span_name: Logical span name, e.g. ``"restwire.http"``.
        **attrs: Span attributes; ``None`` values are dropped.

    Yields:
        The active span, so callers can add attributes discovered later.
    """
    attributes = {k: v for k, v in attrs.items() if v is not None}
    with _tracer.start_as_current_span(
        span_name,
        attributes=attributes,
        record_exception=True,
        set_status_on_exception=True,
    ) as span:
        yield span


def mark_error(span: Span, reason: str) -> None:
    """Flag ``span`` as failed with a classified ``reason``."""
    span.set_attribute("error.type", reason)
    span.set_status(Status(StatusCode.ERROR, reason))
