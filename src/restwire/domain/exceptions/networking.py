# Copyright (c) Restwire.
# SPDX-License-Identifier: MIT
"""
Networking exceptions.

Purpose:
    Classified failures of a single controller call. Every stage of the
    request pipeline terminates with exactly one of these:

    * ``TransportError``: the exchange never produced a response
      (connectivity, DNS, TLS, timeout).
    * ``BadResponse``: the transport produced something that is not a
      well-formed HTTP response.
    * ``UnexpectedStatusCode``: the status differs from the expected one.
    * ``MalformedResponse``: the body could not be deserialized.

Layer:
    domain/exceptions

Notes:
    - Raw body bytes are attached wherever a body was received so callers can
      parse a structured error payload from the server.
    - Bodies are never rendered into ``str(exc)``.
"""

from __future__ import annotations

from typing import Any

from restwire.domain.exceptions.base import RestwireError
from restwire.domain.response import ResponseMetadata


class NetworkingError(RestwireError):
    """Base class for request pipeline failures."""

    code = "NETWORKING_ERROR"


class UnexpectedStatusCode(NetworkingError):
    """The HTTP status did not match the configured expectation.

    Args:
        status_code: Actual status code returned by the server.
        response: Metadata of the offending response.
        data: Raw response body.
        expected: The status code the caller asked for, if known.
    """

    code = "UNEXPECTED_STATUS_CODE"

    def __init__(
        self,
        status_code: int,
        response: ResponseMetadata,
        data: bytes,
        *,
        expected: int | None = None,
    ) -> None:
        message = f"Unexpected status code {status_code}"
        if expected is not None:
            message += f" (expected {expected})"
        super().__init__(
            message + ".",
            details={"status": status_code, "expected": expected, "url": response.url},
        )
        self.status_code = status_code
        self.response = response
        self.data = data
        self.expected = expected


class BadResponse(NetworkingError):
    """The transport returned a response that is not a proper HTTP response."""

    code = "BAD_RESPONSE"

    def __init__(self, response: Any, data: bytes) -> None:
        super().__init__(
            "Transport returned a response that is not a valid HTTP response.",
            details={"response_type": type(response).__name__},
        )
        self.response = response
        self.data = data


class MalformedResponse(NetworkingError):
    """The body of an accepted response could not be deserialized.

    Args:
        response: Metadata of the response.
        data: Raw response body.
        error: The exception raised by the deserializer.
    """

    code = "MALFORMED_RESPONSE"

    def __init__(self, response: ResponseMetadata, data: bytes, error: BaseException) -> None:
        super().__init__(
            f"Response body could not be deserialized: {error}",
            details={
                "status": response.status_code,
                "url": response.url,
                "error_type": type(error).__name__,
                "size": len(data),
            },
        )
        self.response = response
        self.data = data
        self.error = error


class TransportError(NetworkingError):
    """The underlying network layer failed before a response was received."""

    code = "TRANSPORT_ERROR"

    def __init__(self, error: BaseException, *, url: str | None = None) -> None:
        super().__init__(
            f"Transport failure: {error}",
            details={"error_type": type(error).__name__, "url": url},
        )
        self.error = error
        self.url = url


class TransportTimeout(TransportError):
    """The request exceeded its configured timeout."""

    code = "TRANSPORT_TIMEOUT"


class DeserializationError(NetworkingError):
    """Raised by deserializers when bytes cannot be turned into the response type.

    Args:
        message: Human-readable description.
        data: The bytes that failed to deserialize.
        error: Underlying decoder error, if any.
    """

    code = "DESERIALIZATION_ERROR"

    def __init__(self, message: str, data: bytes, error: BaseException | None = None) -> None:
        super().__init__(message, details={"size": len(data)})
        self.data = data
        self.error = error
