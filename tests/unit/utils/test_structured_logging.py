"""Unit tests for the structured logging setup."""

import json
import logging

import pytest

from batch_translator.utils.logging import (
    REDACTED_VALUE,
    bind_context,
    get_logger,
    sanitization_processor,
    sanitize_for_logging,
)


@pytest.mark.unit
def test_get_logger_returns_bound_logger() -> None:
    logger = get_logger("test_module")

    assert hasattr(logger, "bind")
    assert hasattr(logger, "info")
    assert hasattr(logger, "error")


@pytest.mark.unit
def test_events_are_rendered_as_json(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    get_logger("batch_translator.test").info(
        "translation.batch.completed", results=3, api_token="abc"
    )

    log_data = json.loads(caplog.records[-1].message)
    assert log_data["event"] == "translation.batch.completed"
    assert log_data["logger"] == "batch_translator.test"
    assert log_data["results"] == 3
    assert log_data["api_token"] == REDACTED_VALUE
    assert "timestamp" in log_data


@pytest.mark.unit
def test_sanitize_for_logging_redacts_nested_values() -> None:
    data = {"password": "secret123", "user": "admin", "ctx": {"client_secret": "x"}}

    sanitized = sanitize_for_logging(data)

    assert sanitized == {
        "password": REDACTED_VALUE,
        "user": "admin",
        "ctx": {"client_secret": REDACTED_VALUE},
    }
    assert data["password"] == "secret123"


@pytest.mark.unit
def test_sanitization_processor_keeps_regular_fields() -> None:
    event = sanitization_processor(
        None, "info", {"event": "x", "stage": "parse", "token": "t"}
    )

    assert event == {"event": "x", "stage": "parse", "token": REDACTED_VALUE}


@pytest.mark.unit
def test_bind_context(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    bind_context(translator="orders").info("translation.stage.completed")

    log_data = json.loads(caplog.records[-1].message)
    assert log_data["translator"] == "orders"
