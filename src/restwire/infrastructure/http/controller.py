# Copyright (c) Restwire.
# SPDX-License-Identifier: MIT
"""REST controller: a per-host request pipeline over httpx.

A controller owns a fixed base URL and one ``httpx.AsyncClient`` shared by all
calls made through it. Each verb call runs the same linear pipeline:

1. Resolve the target URL (base URL, or base URL + relative path).
2. Build the request: method, ``Accept`` from the deserializer, custom
   headers, header-generator headers, JSON body and ``Content-Type``, timeout.
3. Send it (the only suspension point).
4. Classify the outcome: transport failure, bad response, unexpected status.
5. Hand the body bytes to the deserializer; wrap any failure as malformed.
6. Return ``RestResult(value, response_metadata)``.

Notes:
    * Caller-facing exceptions are always ``NetworkingError`` subclasses;
      httpx types never cross the boundary. Unusable request bodies raise
      ``TypeError`` / ``JSONEncodeError`` before any I/O.
    * No retries and no silent recovery: every failure ends the call.
    * Responses from concurrent calls complete in any order.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from contextlib import suppress
from types import TracebackType
from typing import Any, Final, Self, overload
from urllib.parse import quote

import httpx
from pydantic import BaseModel, TypeAdapter

from restwire.config.settings import RestSettings, get_settings
from restwire.domain.exceptions.networking import (
    BadResponse,
    MalformedResponse,
    NetworkingError,
    TransportError,
    TransportTimeout,
    UnexpectedStatusCode,
)
from restwire.domain.interfaces.deserializer import Deserializer
from restwire.domain.json_value import JSONValue
from restwire.domain.response import ResponseMetadata, RestResult
from restwire.infrastructure.deserializers.json_deserializer import (
    DecodableDeserializer,
    JSONDeserializer,
)
from restwire.infrastructure.http.options import RequestOptions
from restwire.infrastructure.http.trust import SameHostTrustTransport, TrustPolicy
from restwire.infrastructure.logging.logger import get_json_logger, get_request_id
from restwire.infrastructure.observability.metrics import (
    get_rest_errors_total,
    get_rest_http_status_total,
    get_rest_request_latency_seconds,
)
from restwire.infrastructure.observability.tracing import mark_error, traced
from restwire.types import HeaderMap

__all__ = ["HeaderGenerator", "RestController"]

L = get_json_logger(__name__)

type HeaderGenerator = Callable[[httpx.URL], HeaderMap | None]
type DeserializerLike[T] = Deserializer[T] | type[T]

_GET: Final[str] = "GET"
_POST: Final[str] = "POST"
_PUT: Final[str] = "PUT"
_PATCH: Final[str] = "PATCH"
_DELETE: Final[str] = "DELETE"

_JSON_TYPE: Final[str] = "application/json"
_ALLOWED_SCHEMES: Final[frozenset[str]] = frozenset({"http", "https"})
# Everything a path segment may carry literally; "?" and "#" are escaped.
_PATH_SAFE: Final[str] = "/:@!$&'()*+,;=%~"


def _is_absolute(url: httpx.URL) -> bool:
    return url.scheme in _ALLOWED_SCHEMES and bool(url.host)


def _coerce_deserializer(deserializer: Any) -> Deserializer[Any]:
    """Return a deserializer instance for ``deserializer``.

    ``None`` selects JSON; a deserializer class is instantiated; any other type
    (pydantic model, dataclass, ``list[int]`` ...) is decoded with pydantic.
    """
    if deserializer is None:
        return JSONDeserializer()
    if isinstance(deserializer, type):
        if hasattr(deserializer, "deserialize") and hasattr(deserializer, "accept_header"):
            return deserializer()
        return DecodableDeserializer(deserializer)
    if isinstance(deserializer, Deserializer):
        return deserializer
    return DecodableDeserializer(deserializer)


def encode_body(body: Any) -> bytes | None:
    """Serialize a request body to JSON bytes.

    Args:
        body: ``None``, a ``JSONValue``, a pydantic model, or any value a
            ``pydantic.TypeAdapter`` can serialize (dataclass, dict, list ...).

    Returns:
        Encoded JSON, or ``None`` when there is no body.

    Raises:
        JSONEncodeError: If a ``JSONValue`` cannot be encoded.
        TypeError: For raw bytes or values pydantic cannot serialize.
    """
    if body is None:
        return None
    if isinstance(body, JSONValue):
        return body.to_bytes()
    if isinstance(body, (bytes, bytearray, memoryview)):
        raise TypeError("Raw byte bodies are not supported; send JSON-encodable values.")
    try:
        if isinstance(body, BaseModel):
            return body.model_dump_json(by_alias=True).encode("utf-8")
        return TypeAdapter(type(body)).dump_json(body, by_alias=True)
    except (TypeError, ValueError) as exc:
        raise TypeError(f"{type(body).__name__} cannot be encoded as JSON: {exc}") from exc


def _metadata(response: httpx.Response) -> ResponseMetadata:
    """Build transport-agnostic metadata from an httpx response."""
    try:
        elapsed: float | None = response.elapsed.total_seconds()
    except RuntimeError:
        elapsed = None
    return ResponseMetadata(
        status_code=response.status_code,
        url=str(response.url),
        headers={k.lower(): v for k, v in response.headers.items()},
        reason_phrase=response.reason_phrase,
        http_version=response.http_version,
        elapsed_s=elapsed,
    )


class RestController:
    """Issue REST calls against one base URL.

    Args:
        base_url: Absolute http(s) URL every call is resolved against.
        settings: Defaults for timeout, user agent and trust; falls back to
            :func:`restwire.config.get_settings`.
        http: Optional shared ``httpx.AsyncClient``. If omitted, a client
            is created and owned by this instance. An injected client is
            used as-is, so the user agent and self-signed trust only apply
            to owned clients.
        header_generator: Callable invoked with the target URL of every call;
            its headers override same-named per-call headers.
        accept_self_signed_certificate: Override of the settings flag.

    Raises:
        ValueError: If ``base_url`` is not an absolute http(s) URL.
    """

    def __init__(
        self,
        base_url: httpx.URL | str,
        *,
        settings: RestSettings | None = None,
        http: httpx.AsyncClient | None = None,
        header_generator: HeaderGenerator | None = None,
        accept_self_signed_certificate: bool | None = None,
    ) -> None:
        url = httpx.URL(base_url)
        if not _is_absolute(url):
            raise ValueError(f"Base URL must be an absolute http(s) URL, got {str(url)!r}")

        self._base_url = url
        self._settings = settings or get_settings()
        self.header_generator = header_generator

        if http is None:
            self._trust: SameHostTrustTransport | None = SameHostTrustTransport(url.host)
            self._client = httpx.AsyncClient(
                transport=self._trust,
                timeout=self._settings.timeout_s,
                follow_redirects=self._settings.follow_redirects,
                headers={"User-Agent": self._settings.user_agent},
            )
            self._owns_client = True
        else:
            self._trust = None
            self._client = http
            self._owns_client = False

        self._accept_self_signed = False
        self.accept_self_signed_certificate = (
            accept_self_signed_certificate
            if accept_self_signed_certificate is not None
            else self._settings.accept_self_signed_certificate
        )

    # ------------------------------------------------------------------ #
    # Factories and lifecycle
    # ------------------------------------------------------------------ #

    @classmethod
    def make(cls, url: httpx.URL | str, **kwargs: Any) -> RestController | None:
        """Create a controller, or return ``None`` if ``url`` is not a valid base URL.

        Args:
            url: URL string or ``httpx.URL``.
            **kwargs: Forwarded to the constructor.
        """
        try:
            parsed = httpx.URL(url)
        except (httpx.InvalidURL, TypeError):
            return None
        if not _is_absolute(parsed):
            return None
        return cls(parsed, **kwargs)

    @classmethod
    def from_url(cls, url: httpx.URL, **kwargs: Any) -> RestController:
        """Create a controller from an already-parsed absolute http(s) URL.

        Raises:
            ValueError: If ``url`` is relative, has no host, or uses a scheme
                other than ``http`` / ``https``. Use :meth:`make` to get
                ``None`` instead.
        """
        return cls(url, **kwargs)

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance owns it.

        Calls made after closing fail with :class:`TransportError`.
        """
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    # ------------------------------------------------------------------ #
    # Configuration
    # ------------------------------------------------------------------ #

    @property
    def base_url(self) -> httpx.URL:
        """Return the immutable base URL."""
        return self._base_url

    @property
    def accept_self_signed_certificate(self) -> bool:
        """Whether a self-signed certificate from the base host is accepted."""
        return self._accept_self_signed

    @accept_self_signed_certificate.setter
    def accept_self_signed_certificate(self, value: bool) -> None:
        self._accept_self_signed = bool(value)
        if self._trust is not None:
            self._trust.policy = (
                TrustPolicy.SAME_HOST_SELF_SIGNED if self._accept_self_signed else TrustPolicy.DEFAULT
            )
        elif self._accept_self_signed:
            L.warning(
                "restwire.self_signed_ignored",
                extra={"extra": {"reason": "injected_client", "host": self._base_url.host}},
            )

    def resolve(self, path: str | None = None) -> httpx.URL:
        """Return the absolute URL for ``path``.

        ``path`` is always appended to the base URL's path, never resolved
        against it: ``/a`` and ``a`` both land under the base path. ``?`` and
        ``#`` in ``path`` are percent-encoded and stay part of the path.
        """
        if path is None:
            return self._base_url
        base = quote(self._base_url.path, safe=_PATH_SAFE)
        joined = base.rstrip("/") + "/" + quote(path.lstrip("/"), safe=_PATH_SAFE)
        return self._base_url.copy_with(path=joined)

    # ------------------------------------------------------------------ #
    # Verbs
    # ------------------------------------------------------------------ #

    @overload
    async def get(
        self,
        deserializer: None = None,
        *,
        path: str | None = None,
        options: RequestOptions | None = None,
    ) -> RestResult[JSONValue]: ...

    @overload
    async def get[T](
        self,
        deserializer: DeserializerLike[T],
        *,
        path: str | None = None,
        options: RequestOptions | None = None,
    ) -> RestResult[T]: ...

    async def get(
        self,
        deserializer: Any = None,
        *,
        path: str | None = None,
        options: RequestOptions | None = None,
    ) -> RestResult[Any]:
        """GET ``path`` and deserialize the response (JSON by default)."""
        return await self._call(_GET, path, None, deserializer, options)

    @overload
    async def post(
        self,
        body: Any = None,
        deserializer: None = None,
        *,
        path: str | None = None,
        options: RequestOptions | None = None,
    ) -> RestResult[JSONValue]: ...

    @overload
    async def post[T](
        self,
        body: Any,
        deserializer: DeserializerLike[T],
        *,
        path: str | None = None,
        options: RequestOptions | None = None,
    ) -> RestResult[T]: ...

    async def post(
        self,
        body: Any = None,
        deserializer: Any = None,
        *,
        path: str | None = None,
        options: RequestOptions | None = None,
    ) -> RestResult[Any]:
        """POST ``body`` as JSON and deserialize the response (JSON by default)."""
        return await self._call(_POST, path, body, deserializer, options)

    @overload
    async def put(
        self,
        body: Any = None,
        deserializer: None = None,
        *,
        path: str | None = None,
        options: RequestOptions | None = None,
    ) -> RestResult[JSONValue]: ...

    @overload
    async def put[T](
        self,
        body: Any,
        deserializer: DeserializerLike[T],
        *,
        path: str | None = None,
        options: RequestOptions | None = None,
    ) -> RestResult[T]: ...

    async def put(
        self,
        body: Any = None,
        deserializer: Any = None,
        *,
        path: str | None = None,
        options: RequestOptions | None = None,
    ) -> RestResult[Any]:
        """PUT ``body`` as JSON and deserialize the response (JSON by default)."""
        return await self._call(_PUT, path, body, deserializer, options)

    @overload
    async def patch(
        self,
        body: Any = None,
        deserializer: None = None,
        *,
        path: str | None = None,
        options: RequestOptions | None = None,
    ) -> RestResult[JSONValue]: ...

    @overload
    async def patch[T](
        self,
        body: Any,
        deserializer: DeserializerLike[T],
        *,
        path: str | None = None,
        options: RequestOptions | None = None,
    ) -> RestResult[T]: ...

    async def patch(
        self,
        body: Any = None,
        deserializer: Any = None,
        *,
        path: str | None = None,
        options: RequestOptions | None = None,
    ) -> RestResult[Any]:
        """PATCH ``body`` as JSON and deserialize the response (JSON by default)."""
        return await self._call(_PATCH, path, body, deserializer, options)

    @overload
    async def delete(
        self,
        body: Any = None,
        deserializer: None = None,
        *,
        path: str | None = None,
        options: RequestOptions | None = None,
    ) -> RestResult[JSONValue]: ...

    @overload
    async def delete[T](
        self,
        body: Any,
        deserializer: DeserializerLike[T],
        *,
        path: str | None = None,
        options: RequestOptions | None = None,
    ) -> RestResult[T]: ...

    async def delete(
        self,
        body: Any = None,
        deserializer: Any = None,
        *,
        path: str | None = None,
        options: RequestOptions | None = None,
    ) -> RestResult[Any]:
        """DELETE, optionally with a JSON ``body``, and deserialize the response."""
        return await self._call(_DELETE, path, body, deserializer, options)

    # ------------------------------------------------------------------ #
    # Pipeline
    # ------------------------------------------------------------------ #

    def build_request(
        self,
        method: str,
        *,
        path: str | None = None,
        body: Any = None,
        deserializer: Deserializer[Any] | None = None,
        options: RequestOptions | None = None,
    ) -> httpx.Request:
        """Build the outgoing request without sending it.

        Header precedence, lowest first: ``X-Request-ID`` from the logging
        context, ``Accept``, per-call headers, header-generator output,
        ``Content-Type`` (only with a body).
        """
        options = options or RequestOptions()
        accept = (deserializer or JSONDeserializer()).accept_header
        url = self.resolve(path)
        content = encode_body(body)

        headers = httpx.Headers()
        if self._settings.propagate_request_id:
            request_id = get_request_id()
            if request_id:
                headers["X-Request-ID"] = request_id
        headers["Accept"] = accept
        for name, value in (options.headers or {}).items():
            headers[name] = value
        if self.header_generator is not None:
            for name, value in (self.header_generator(url) or {}).items():
                headers[name] = value
        if content is not None:
            headers["Content-Type"] = _JSON_TYPE

        timeout = options.timeout_s if options.timeout_s is not None else self._settings.timeout_s
        return self._client.build_request(
            method,
            url,
            headers=headers,
            content=content,
            timeout=httpx.Timeout(timeout),
        )

    async def _call(
        self,
        method: str,
        path: str | None,
        body: Any,
        deserializer: Any,
        options: RequestOptions | None,
    ) -> RestResult[Any]:
        """Run the full pipeline for one call."""
        options = options or RequestOptions()
        resolved = _coerce_deserializer(deserializer)
        request = self.build_request(
            method, path=path, body=body, deserializer=resolved, options=options
        )
        host = request.url.host
        url = str(request.url)

        start = time.perf_counter()
        status: int | None = None
        error_reason: str | None = None

        async with traced("restwire.http", method=method, url=url, host=host) as span:
            try:
                response = await self._send(request)
                if isinstance(response, httpx.Response):
                    data = response.content
                    status = response.status_code
                    span.set_attribute("http.response.status_code", status)
                else:
                    data = b""
                metadata = self._validate(response, data, options)

                try:
                    value = resolved.deserialize(data)
                except Exception as exc:  # noqa: BLE001
                    raise MalformedResponse(metadata, data, exc) from exc

                return RestResult(value, metadata)
            except NetworkingError as exc:
                error_reason = type(exc).__name__
                mark_error(span, error_reason)
                raise
            finally:
                self._observe(method, host, url, status, error_reason, time.perf_counter() - start)

    async def _send(self, request: httpx.Request) -> httpx.Response:
        """Send ``request`` and map transport errors."""
        if self._client.is_closed:
            raise TransportError(
                RuntimeError("HTTP client has been closed"), url=str(request.url)
            )
        try:
            return await self._client.send(request)
        except httpx.TimeoutException as exc:
            raise TransportTimeout(exc, url=str(request.url)) from exc
        except httpx.RequestError as exc:
            raise TransportError(exc, url=str(request.url)) from exc

    @staticmethod
    def _validate(response: Any, data: bytes, options: RequestOptions) -> ResponseMetadata:
        """Classify the raw response; return its metadata if it may be deserialized."""
        if not isinstance(response, httpx.Response) or not 100 <= response.status_code <= 599:
            raise BadResponse(response, data)

        metadata = _metadata(response)
        expected = options.expected_status_code
        if expected is not None and metadata.status_code != expected:
            raise UnexpectedStatusCode(metadata.status_code, metadata, data, expected=expected)
        return metadata

    def _observe(
        self,
        method: str,
        host: str,
        url: str,
        status: int | None,
        error_reason: str | None,
        elapsed: float,
    ) -> None:
        """Record metrics and a debug log line for a finished call."""
        outcome = "error" if error_reason else "success"
        with suppress(Exception):
            get_rest_request_latency_seconds().labels(
                method=method, host=host, outcome=outcome
            ).observe(elapsed)
            if status is not None:
                get_rest_http_status_total().labels(
                    method=method, host=host, status=str(status)
                ).inc()
            if error_reason:
                get_rest_errors_total().labels(
                    method=method, host=host, reason=error_reason
                ).inc()

        L.debug(
            "restwire.call",
            extra={
                "extra": {
                    "method": method,
                    "url": url,
                    "status": status,
                    "outcome": outcome,
                    "reason": error_reason,
                    "elapsed_ms": round(elapsed * 1000.0, 2),
                }
            },
        )

    def __repr__(self) -> str:
        return f"RestController({str(self._base_url)!r})"
