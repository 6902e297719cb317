# tests/unit/infrastructure/test_json_logger.py
from __future__ import annotations

import json
import logging
import sys
from typing import Any

import pytest

from restwire.infrastructure.logging.logger import (
    _JsonFormatter,
    configure_root_logging,
    get_json_logger,
    get_request_id,
    get_trace_id,
    request_context,
    set_request_context,
)


def _render(msg: str, *, exc_info: Any = None, **attrs: Any) -> dict[str, Any]:
    """Format a synthetic record and return the parsed JSON payload."""
    logger = logging.getLogger("restwire.test")
    record = logger.makeRecord(
        name=logger.name,
        level=logging.INFO,
        fn="test_json_logger",
        lno=1,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    for key, value in attrs.items():
        setattr(record, key, value)
    return json.loads(_JsonFormatter().format(record))


def test_configure_root_logging_is_idempotent(monkeypatch: pytest.MonkeyPatch) -> None:
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    monkeypatch.setenv("LOG_LEVEL", "warning")

    configure_root_logging()
    configure_root_logging()

    assert root.level == logging.WARNING
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, _JsonFormatter)


def test_explicit_level_beats_env(monkeypatch: pytest.MonkeyPatch) -> None:
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    monkeypatch.setenv("LOG_LEVEL", "warning")

    configure_root_logging(logging.DEBUG)

    assert root.level == logging.DEBUG


def test_stable_keys_and_structured_extra() -> None:
    payload = _render("restwire.call", extra={"method": "GET", "status": 200})
    assert payload["message"] == "restwire.call"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "restwire.test"
    assert "ts" in payload
    assert payload["method"] == "GET"
    assert payload["status"] == 200


def test_request_context_enriches_records(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("REQUEST_ID", raising=False)
    set_request_context(request_id="rid-1", trace_id="0af7651916cd43dd8448eb211c80319c")

    assert get_request_id() == "rid-1"
    assert get_trace_id() == "0af7651916cd43dd8448eb211c80319c"
    payload = _render("hello")
    assert payload["request_id"] == "rid-1"
    assert payload["trace_id"] == "0af7651916cd43dd8448eb211c80319c"

    set_request_context(request_id=None)
    assert get_request_id() is None
    assert "request_id" not in _render("hello")


def test_record_attribute_wins_over_context() -> None:
    set_request_context(request_id="from-context")
    assert _render("hello", request_id="from-record")["request_id"] == "from-record"


def test_env_request_id_is_last_resort(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REQUEST_ID", "env-id")
    assert _render("hello")["request_id"] == "env-id"


def test_exception_details_are_rendered() -> None:
    try:
        raise ValueError("boom")
    except ValueError:
        payload = _render("failure", exc_info=sys.exc_info())

    assert payload["exc_type"] == "ValueError"
    assert payload["exc_message"] == "boom"


def test_non_json_extra_values_are_stringified() -> None:
    payload = _render("hello", extra={"when": object})
    assert payload["when"] == str(object)


def test_get_json_logger_propagates_to_root() -> None:
    logger = get_json_logger("restwire.some.module")
    assert logger.name == "restwire.some.module"
    assert logger.propagate is True


def test_request_context_restores_previous_ids() -> None:
    set_request_context(request_id="outer")
    with request_context(request_id="inner", trace_id="t-1"):
        assert get_request_id() == "inner"
        assert get_trace_id() == "t-1"
    assert get_request_id() == "outer"
    assert get_trace_id() is None


def test_library_logger_is_silent_by_default() -> None:
    handlers = logging.getLogger("restwire").handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)
