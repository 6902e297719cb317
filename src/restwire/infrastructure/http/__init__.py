# Copyright (c) Restwire.
# SPDX-License-Identifier: MIT
"""HTTP request pipeline.

Purpose:
    Group the httpx-backed modules:

    * controller: ``RestController`` and request/response pipeline.
    * options: per-call ``RequestOptions``.
    * trust: same-host self-signed certificate transport policy.
"""

from __future__ import annotations

from restwire.infrastructure.http.controller import HeaderGenerator, RestController, encode_body
from restwire.infrastructure.http.options import RequestOptions
from restwire.infrastructure.http.trust import (
    SameHostTrustTransport,
    TrustPolicy,
    grants_self_signed,
)

__all__ = [
    "HeaderGenerator",
    "RequestOptions",
    "RestController",
    "SameHostTrustTransport",
    "TrustPolicy",
    "encode_body",
    "grants_self_signed",
]
