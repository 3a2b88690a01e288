"""Unit tests for core config parsing."""

from __future__ import annotations

import os

import pytest

from core.config import TallyConfig
from core.errors import TallyConfigError


def test_from_env_uses_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fall back to table output and warning logs."""
    for variable in ("TALLY_OUTPUT_FORMAT", "TALLY_LOG_LEVEL", "TALLY_REJECTS_PATH"):
        monkeypatch.delenv(variable, raising=False)

    config = TallyConfig.from_env()

    assert (config.output_format, config.log_level, config.rejects_path) == (
        "table",
        "warning",
        None,
    )


def test_from_env_reads_rejects_path(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve the rejects path from environment."""
    monkeypatch.setenv("TALLY_REJECTS_PATH", "./.tmp-tally/rejects.jsonl")

    config = TallyConfig.from_env()

    assert config.rejects_path is not None and config.rejects_path.name == "rejects.jsonl"


def test_from_env_normalizes_output_format(monkeypatch: pytest.MonkeyPatch) -> None:
    """Output format should be case-insensitive."""
    monkeypatch.setenv("TALLY_OUTPUT_FORMAT", " CSV ")

    config = TallyConfig.from_env()

    assert config.output_format == "csv"


def test_from_env_raises_for_invalid_output_format(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for unsupported output formats."""
    monkeypatch.setenv("TALLY_OUTPUT_FORMAT", "xml")

    with pytest.raises(TallyConfigError):
        TallyConfig.from_env()

    assert os.getenv("TALLY_OUTPUT_FORMAT") == "xml"


def test_from_env_raises_for_invalid_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for unknown log levels."""
    monkeypatch.setenv("TALLY_LOG_LEVEL", "verbose")

    with pytest.raises(TallyConfigError):
        TallyConfig.from_env()
