from __future__ import annotations

import dataclasses

import pytest

from restwire.domain.response import ResponseMetadata


def _meta(status: int = 200, **headers: str) -> ResponseMetadata:
    return ResponseMetadata(
        status_code=status,
        url="https://api.restwire.test/items",
        headers={k.replace("_", "-"): v for k, v in headers.items()},
    )


def test_content_type_reads_lowercased_header() -> None:
    assert _meta(**{"content_type": "image/png"}).content_type == "image/png"
    assert _meta().content_type is None


def test_header_lookup_ignores_case_and_falls_back_to_default() -> None:
    meta = _meta(etag='"v1"')
    assert meta.header("ETag") == '"v1"'
    assert meta.header("etag") == '"v1"'
    assert meta.header("Retry-After") is None
    assert meta.header("Retry-After", "30") == "30"


@pytest.mark.parametrize(
    ("status", "success"),
    [(199, False), (200, True), (204, True), (299, True), (302, False), (404, False), (500, False)],
)
def test_is_success_covers_2xx_only(status: int, success: bool) -> None:
    assert _meta(status).is_success is success


def test_metadata_defaults_and_immutability() -> None:
    meta = _meta()
    assert meta.reason_phrase == ""
    assert meta.http_version == "HTTP/1.1"
    assert meta.elapsed_s is None
    with pytest.raises(dataclasses.FrozenInstanceError):
        meta.status_code = 500  # type: ignore[misc]
