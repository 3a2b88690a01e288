"""Unit tests for structured logging configuration."""

from __future__ import annotations

import json
from typing import Iterator

import pytest

from core.constants import DEFAULT_LOG_LEVEL
from core.logging_config import configure_logging, get_logger


@pytest.fixture(autouse=True)
def _restore_default_level() -> Iterator[None]:
    yield
    configure_logging(DEFAULT_LOG_LEVEL)


def test_logger_writes_json_events_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    """Events should render as JSON on stderr and keep stdout clean."""
    configure_logging("info")

    get_logger("tests.logging").info("sample_event", line_number=3)
    captured = capsys.readouterr()
    payload = json.loads(captured.err.strip())

    assert (
        captured.out == ""
        and payload["event"] == "sample_event"
        and payload["line_number"] == 3
        and payload["level"] == "info"
    )


def test_logger_filters_below_configured_level(capsys: pytest.CaptureFixture[str]) -> None:
    """Info events should be dropped at warning level."""
    configure_logging("warning")

    get_logger("tests.logging").info("hidden_event")

    assert capsys.readouterr().err == ""
