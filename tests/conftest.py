# tests/conftest.py
from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Iterator
from typing import Any

import httpx
import pytest

from restwire.config.settings import RestSettings, get_settings
from restwire.infrastructure.http.controller import RestController
from restwire.infrastructure.logging.logger import set_request_context

BASE_URL = "https://api.restwire.test"


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Force pytest-anyio to use asyncio (not trio)."""
    return "asyncio"


@pytest.fixture(autouse=True)
def _clean_context() -> Iterator[None]:
    """Reset correlation ids and the cached settings around every test."""
    set_request_context(request_id=None, trace_id=None)
    get_settings.cache_clear()
    yield
    set_request_context(request_id=None, trace_id=None)
    get_settings.cache_clear()


@pytest.fixture
def settings() -> RestSettings:
    """Settings with library defaults, independent of the process env."""
    return RestSettings()


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it handled."""

    def __init__(self, handler: Callable[[httpx.Request], Any]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> Any:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def recording_transport() -> Callable[..., RecordingTransport]:
    """Build a RecordingTransport answering with a fixed response or a handler."""

    def _factory(
        response: httpx.Response | None = None,
        *,
        handler: Callable[[httpx.Request], Any] | None = None,
    ) -> RecordingTransport:
        if handler is None:
            fixed = response if response is not None else httpx.Response(200, json={})

            def _replay(_request: httpx.Request) -> httpx.Response:
                return httpx.Response(
                    fixed.status_code, headers=fixed.headers, content=fixed.content
                )

            handler = _replay
        return RecordingTransport(handler)

    return _factory


@pytest.fixture
async def controller_factory(
    settings: RestSettings,
) -> AsyncIterator[Callable[..., RestController]]:
    """Create controllers bound to a mock transport; clients are closed afterwards."""
    clients: list[httpx.AsyncClient] = []

    def _factory(
        transport: httpx.AsyncBaseTransport,
        base_url: str = BASE_URL,
        **kwargs: Any,
    ) -> RestController:
        http = httpx.AsyncClient(transport=transport)
        clients.append(http)
        return RestController(base_url, settings=settings, http=http, **kwargs)

    yield _factory

    for http in clients:
        await http.aclose()
