"""Unit tests for run-spec parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.errors import TallyRunSpecError
from core.run_spec import load_run_spec
from tests.fixture_paths import fixture_path


def test_load_run_spec_valid_batch_parses_steps() -> None:
    """Valid run-spec should parse expected command order."""
    spec = load_run_spec(str(fixture_path("run_spec/valid_batch.yaml")))

    assert tuple(step.command for step in spec.steps) == ("validate", "process") and (
        spec.defaults.output_format == "csv"
    )


def test_load_run_spec_invalid_command_raises_error() -> None:
    """Unsupported command name should raise run-spec error."""
    with pytest.raises(TallyRunSpecError):
        load_run_spec(str(fixture_path("run_spec/invalid_command.yaml")))


def test_load_run_spec_invalid_defaults_key_raises_error() -> None:
    """Unknown defaults field should be rejected."""
    with pytest.raises(TallyRunSpecError):
        load_run_spec(str(fixture_path("run_spec/invalid_defaults_key.yaml")))


def test_load_run_spec_missing_source_raises_error() -> None:
    """Every step must name a source."""
    with pytest.raises(TallyRunSpecError):
        load_run_spec(str(fixture_path("run_spec/missing_source.yaml")))


def test_load_run_spec_rejects_unsupported_version(tmp_path: Path) -> None:
    """Only version 1 run-specs are accepted."""
    spec_path = tmp_path / "spec.yaml"
    spec_path.write_text("version: 2\nsteps:\n  - command: process\n    source: a.csv\n")

    with pytest.raises(TallyRunSpecError):
        load_run_spec(str(spec_path))


def test_load_run_spec_rejects_empty_steps(tmp_path: Path) -> None:
    """A run-spec without steps is invalid."""
    spec_path = tmp_path / "spec.yaml"
    spec_path.write_text("version: 1\nsteps: []\n")

    with pytest.raises(TallyRunSpecError):
        load_run_spec(str(spec_path))


def test_load_run_spec_missing_file_raises_error(tmp_path: Path) -> None:
    """Missing run-spec paths should fail with a run-spec error."""
    with pytest.raises(TallyRunSpecError):
        load_run_spec(str(tmp_path / "missing.yaml"))


def test_load_run_spec_rejects_unknown_step_field(tmp_path: Path) -> None:
    """A misspelled step field should fail instead of being ignored."""
    spec_path = tmp_path / "spec.yaml"
    spec_path.write_text(
        "version: 1\n"
        "steps:\n"
        "  - command: process\n"
        "    source: a.csv\n"
        "    rejcts: out/a.jsonl\n"
    )

    with pytest.raises(TallyRunSpecError, match="rejcts"):
        load_run_spec(str(spec_path))
