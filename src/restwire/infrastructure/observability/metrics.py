# Copyright (c) Restwire.
# SPDX-License-Identifier: MIT
"""Outbound REST call metrics.

Purpose:
    Provide Prometheus metrics for controller calls:
      * Latency histogram by outcome.
      * HTTP status distribution.
      * Error counter by classified reason.

Design:
    - Functions return lazily created singletons so importing this module
      never registers collectors twice.
    - Labels stay low-cardinality: method, host and status/outcome/reason.
      Paths are deliberately not labelled.
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

_rest_request_latency_seconds: Histogram | None = None
_rest_http_status_total: Counter | None = None
_rest_errors_total: Counter | None = None


def get_rest_request_latency_seconds() -> Histogram:
    """Return (and lazily create) the request latency histogram."""
    global _rest_request_latency_seconds
    if _rest_request_latency_seconds is None:
        _rest_request_latency_seconds = Histogram(
            "restwire_request_latency_seconds",
            "Latency of REST controller calls in seconds.",
            ["method", "host", "outcome"],
        )
    return _rest_request_latency_seconds


def get_rest_http_status_total() -> Counter:
    """Return (and lazily create) the HTTP status counter."""
    global _rest_http_status_total
    if _rest_http_status_total is None:
        _rest_http_status_total = Counter(
            "restwire_http_status_total",
            "REST controller responses by status code.",
            ["method", "host", "status"],
        )
    return _rest_http_status_total


def get_rest_errors_total() -> Counter:
    """Return (and lazily create) the classified error counter."""
    global _rest_errors_total
    if _rest_errors_total is None:
        _rest_errors_total = Counter(
            "restwire_errors_total",
            "REST controller failures by classified reason.",
            ["method", "host", "reason"],
        )
    return _rest_errors_total
