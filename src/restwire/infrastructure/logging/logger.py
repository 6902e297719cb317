# Copyright (c) Restwire.
# SPDX-License-Identifier: MIT
"""JSON logging for restwire.

Purpose:
    Emit one JSON object per log line and correlate controller calls with the
    caller's request and trace ids.

Layer:
    infrastructure/logging

Notes:
    - restwire only emits records. The ``restwire`` logger carries a
      ``NullHandler``; applications opt in to output with
      :func:`configure_root_logging` or their own handlers.
    - Output keys: ``ts``, ``level``, ``logger``, ``message``, then
      ``request_id`` / ``trace_id`` when known, ``exc_type`` /
      ``exc_message`` for exceptions, then any ``extra={"extra": {...}}``
      fields.
    - Correlation lookup order: record attribute, context, then the
      ``REQUEST_ID`` env var (request id) or the active OpenTelemetry span
      (trace id).

Example:
    configure_root_logging("DEBUG")
    with request_context(request_id="req-1"):
        await controller.get(path="items")  # sends X-Request-ID: req-1
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any, Final

from opentelemetry import trace as otel_trace

__all__ = [
    "configure_root_logging",
    "get_json_logger",
    "get_request_id",
    "get_trace_id",
    "request_context",
    "set_request_context",
]

LIBRARY_LOGGER: Final[str] = "restwire"
_ENV_REQUEST_ID: Final[str] = "REQUEST_ID"
_ENV_LOG_LEVEL: Final[str] = "LOG_LEVEL"

_request_id: ContextVar[str | None] = ContextVar("restwire_request_id", default=None)
_trace_id: ContextVar[str | None] = ContextVar("restwire_trace_id", default=None)

logging.getLogger(LIBRARY_LOGGER).addHandler(logging.NullHandler())


def set_request_context(*, request_id: str | None = None, trace_id: str | None = None) -> None:
    """Bind correlation ids to the current task; ``None`` clears a value."""
    _request_id.set(request_id)
    _trace_id.set(trace_id)


@contextmanager
def request_context(
    *, request_id: str | None = None, trace_id: str | None = None
) -> Iterator[None]:
    """Bind correlation ids for the duration of a block, then restore the old ones."""
    rid_token = _request_id.set(request_id)
    tid_token = _trace_id.set(trace_id)
    try:
        yield
    finally:
        _trace_id.reset(tid_token)
        _request_id.reset(rid_token)


def get_request_id() -> str | None:
    """Return the request id bound to the current task."""
    return _request_id.get()


def get_trace_id() -> str | None:
    """Return the trace id bound to the current task."""
    return _trace_id.get()


def _span_trace_id() -> str | None:
    span_context = otel_trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return None
    return otel_trace.format_trace_id(span_context.trace_id)


def _correlation(record: logging.LogRecord) -> dict[str, str]:
    ids: dict[str, str] = {}
    request_id = (
        getattr(record, "request_id", None) or _request_id.get() or os.getenv(_ENV_REQUEST_ID)
    )
    if request_id:
        ids["request_id"] = request_id
    trace_id = getattr(record, "trace_id", None) or _trace_id.get() or _span_trace_id()
    if trace_id:
        ids["trace_id"] = trace_id
    return ids


class _JsonFormatter(logging.Formatter):
    """Render a record as a single compact JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        line: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        line.update(_correlation(record))

        if record.exc_info and record.exc_info[1] is not None:
            error = record.exc_info[1]
            line["exc_type"] = type(error).__name__
            line["exc_message"] = str(error)

        fields = getattr(record, "extra", None)
        if isinstance(fields, dict):
            line.update(fields)

        return json.dumps(line, separators=(",", ":"), ensure_ascii=False, default=str)


def configure_root_logging(level: str | int | None = None) -> None:
    """Attach a JSON stream handler to the root logger once and set its level.

    Args:
        level: Level or level name; defaults to ``$LOG_LEVEL``, else ``INFO``.
    """
    if level is None:
        level = (os.getenv(_ENV_LOG_LEVEL) or "INFO").upper()

    root = logging.getLogger()
    root.setLevel(level)
    if root.handlers:
        return

    stream = logging.StreamHandler()
    stream.setFormatter(_JsonFormatter())
    root.addHandler(stream)


def get_json_logger(name: str) -> logging.Logger:
    """Return ``logging.getLogger(name)``; records propagate to whatever the app configured."""
    logger = logging.getLogger(name)
    logger.propagate = True
    return logger
