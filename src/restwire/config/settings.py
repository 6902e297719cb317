# Copyright (c) Restwire.
# SPDX-License-Identifier: MIT
"""Restwire client settings.

Purpose:
    Provide Pydantic-based defaults for :class:`RestController`: per-call
    timeout, user agent, redirect handling and the same-host self-signed
    certificate switch.

Layer:
    config

Notes:
    - Values are sourced from environment variables prefixed with ``RESTWIRE_``.
    - A controller may be given an explicit ``RestSettings``; otherwise the
      cached process-wide instance from :func:`get_settings` is used.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from restwire._version import __version__


class RestSettings(BaseSettings):
    """Configuration for the REST controller.

    Environment variables (with ``model_config.env_prefix``):

    * ``RESTWIRE_TIMEOUT_S``
    * ``RESTWIRE_USER_AGENT``
    * ``RESTWIRE_ACCEPT_SELF_SIGNED_CERTIFICATE``
    * ``RESTWIRE_FOLLOW_REDIRECTS``
    * ``RESTWIRE_PROPAGATE_REQUEST_ID``
    """

    timeout_s: float = Field(
        60.0,
        gt=0,
        description="Default per-request timeout in seconds when a call sets none.",
    )
    user_agent: str = Field(
        f"restwire/{__version__}",
        description="User agent sent with every request.",
    )
    accept_self_signed_certificate: bool = Field(
        False,
        description=(
            "Accept a self-signed TLS certificate, but only from the exact host "
            "of the controller's base URL."
        ),
    )
    follow_redirects: bool = Field(
        True,
        description=(
            "Follow HTTP redirects on controller-owned clients. Trust is re-checked "
            "per hop, so a redirect never carries self-signed trust to another host."
        ),
    )
    propagate_request_id: bool = Field(
        True,
        description="Send the current logging request id as X-Request-ID.",
    )

    model_config: SettingsConfigDict = SettingsConfigDict(
        env_prefix="RESTWIRE_",
        env_nested_delimiter="__",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> RestSettings:
    """Return a cached singleton ``RestSettings`` instance."""
    return RestSettings()
