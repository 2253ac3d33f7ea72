"""Unit tests for the structured edit logging in ``observability``."""

from __future__ import annotations

import logging

import pytest

from lib_module_config import bind_session_id, edit_session, get_logger
from lib_module_config.observability import SESSION_ID, log_info, make_event


def test_null_handler_present() -> None:
    """Package logger should always include a NullHandler so hosts stay silent by default."""

    logger = get_logger()
    assert any(isinstance(handler, logging.NullHandler) for handler in logger.handlers)


def test_session_id_in_log(caplog: pytest.LogCaptureFixture) -> None:
    """Structured logs should include the bound session id and contextual fields."""

    caplog.set_level(logging.INFO, logger="lib_module_config")
    bind_session_id("session-123")
    try:
        log_info("field_updated", section="booking", path="title")
    finally:
        bind_session_id(None)
    record = caplog.records[-1]
    assert record.getMessage() == "field_updated"
    assert getattr(record, "context") == {"session_id": "session-123", "section": "booking", "path": "title"}


def test_bind_session_id_clears_context() -> None:
    bind_session_id("trace-temp")
    bind_session_id(None)
    assert SESSION_ID.get() is None


def test_edit_session_restores_previous_id(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="lib_module_config")
    with edit_session("outer"):
        with edit_session() as generated:
            log_info("style_updated")
            assert generated and generated != "outer"
        assert SESSION_ID.get() == "outer"
    assert SESSION_ID.get() is None
    assert caplog.records[-1].context["session_id"] == generated


def test_disabled_level_skips_record(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.ERROR, logger="lib_module_config")
    log_info("field_updated", section="booking")
    assert not caplog.records


def test_make_event_merges_optional_payload() -> None:
    assert make_event("booking", "services", {"op": "append"}) == {
        "section": "booking",
        "path": "services",
        "op": "append",
    }
    assert make_event("booking", None) == {"section": "booking", "path": None}
