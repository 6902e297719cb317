# Copyright (c) Restwire.
# SPDX-License-Identifier: MIT
"""Same-host self-signed certificate trust.

Purpose:
    Let a controller talk to a backend that presents a self-signed TLS
    certificate without relaxing verification for anything else.

Design:
    The trust decision is an explicit transport policy evaluated per request:
    :class:`SameHostTrustTransport` sends a request through an unverified
    transport only when the policy is ``SAME_HOST_SELF_SIGNED`` and the
    request's host equals the controller's base host exactly. Any other host,
    including a redirect target, goes through the verifying transport.
"""

from __future__ import annotations

from enum import Enum

import httpx


class TrustPolicy(str, Enum):
    """TLS trust policy for controller-owned transports."""

    DEFAULT = "default"
    SAME_HOST_SELF_SIGNED = "same_host_self_signed"


def grants_self_signed(policy: TrustPolicy, challenge_host: str, base_host: str) -> bool:
    """Return True if a self-signed certificate from ``challenge_host`` is trusted.

    Host names compare case-insensitively; there is no suffix or wildcard
    matching, so ``api.example.com`` never grants ``example.com``.
    """
    if policy is not TrustPolicy.SAME_HOST_SELF_SIGNED:
        return False
    if not challenge_host or not base_host:
        return False
    return challenge_host.lower() == base_host.lower()


class SameHostTrustTransport(httpx.AsyncBaseTransport):
    """Route requests to a verifying or an unverified transport by host.

    Args:
        host: Host of the controller's base URL.
        policy: Initial trust policy; may be changed later via ``policy``.
        verified: Transport used for default handling.
        unverified: Transport used when self-signed trust is granted. Created
            on first use when omitted.
    """

    def __init__(
        self,
        host: str,
        *,
        policy: TrustPolicy = TrustPolicy.DEFAULT,
        verified: httpx.AsyncBaseTransport | None = None,
        unverified: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._host = host
        self.policy = policy
        self._verified = verified or httpx.AsyncHTTPTransport()
        self._unverified = unverified

    @property
    def host(self) -> str:
        """Return the only host that may be granted self-signed trust."""
        return self._host

    def select(self, request: httpx.Request) -> httpx.AsyncBaseTransport:
        """Return the transport that must carry ``request``."""
        if request.url.scheme == "https" and grants_self_signed(
            self.policy, request.url.host, self._host
        ):
            if self._unverified is None:
                self._unverified = httpx.AsyncHTTPTransport(verify=False)
            return self._unverified
        return self._verified

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        return await self.select(request).handle_async_request(request)

    async def aclose(self) -> None:
        await self._verified.aclose()
        if self._unverified is not None:
            await self._unverified.aclose()
