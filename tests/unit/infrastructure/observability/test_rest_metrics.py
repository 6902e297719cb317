from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest
from prometheus_client import REGISTRY

from restwire.domain.exceptions import UnexpectedStatusCode
from restwire.infrastructure.http.controller import RestController
from restwire.infrastructure.http.options import RequestOptions
from restwire.infrastructure.observability.metrics import (
    get_rest_errors_total,
    get_rest_http_status_total,
    get_rest_request_latency_seconds,
)

HOST = "metrics.restwire.test"


def _sample(name: str, **labels: str) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_metric_accessors_return_singletons() -> None:
    assert get_rest_request_latency_seconds() is get_rest_request_latency_seconds()
    assert get_rest_http_status_total() is get_rest_http_status_total()
    assert get_rest_errors_total() is get_rest_errors_total()


@pytest.mark.anyio
async def test_successful_call_is_counted(
    recording_transport: Callable[..., Any],
    controller_factory: Callable[..., RestController],
) -> None:
    controller = controller_factory(recording_transport(), f"https://{HOST}")
    status_before = _sample(
        "restwire_http_status_total", method="GET", host=HOST, status="200"
    )
    latency_before = _sample(
        "restwire_request_latency_seconds_count", method="GET", host=HOST, outcome="success"
    )

    await controller.get()

    assert (
        _sample("restwire_http_status_total", method="GET", host=HOST, status="200")
        == status_before + 1
    )
    assert (
        _sample(
            "restwire_request_latency_seconds_count",
            method="GET",
            host=HOST,
            outcome="success",
        )
        == latency_before + 1
    )


@pytest.mark.anyio
async def test_classified_failure_is_counted(
    recording_transport: Callable[..., Any],
    controller_factory: Callable[..., RestController],
) -> None:
    controller = controller_factory(
        recording_transport(httpx.Response(503)), f"https://{HOST}"
    )
    errors_before = _sample(
        "restwire_errors_total", method="PUT", host=HOST, reason="UnexpectedStatusCode"
    )
    status_before = _sample(
        "restwire_http_status_total", method="PUT", host=HOST, status="503"
    )

    with pytest.raises(UnexpectedStatusCode):
        await controller.put({"a": 1}, options=RequestOptions.expect(200))

    assert (
        _sample("restwire_errors_total", method="PUT", host=HOST, reason="UnexpectedStatusCode")
        == errors_before + 1
    )
    assert (
        _sample("restwire_http_status_total", method="PUT", host=HOST, status="503")
        == status_before + 1
    )
