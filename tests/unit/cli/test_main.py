"""Unit tests for CLI command handling."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cli.main import main
from tests.fixture_paths import fixture_path


def test_cli_format_flag_selects_csv(capsys: pytest.CaptureFixture[str]) -> None:
    """CLI should print one CSV row per account when asked for CSV."""
    exit_code = main(["--format", "csv", str(fixture_path("transactions/basic.csv"))])
    output = capsys.readouterr().out.splitlines()

    assert exit_code == 0 and output == [
        "client,available,held,total,locked",
        "1,1.5000,0.0000,1.5000,false",
        "2,2.0000,0.0000,2.0000,false",
    ]


def test_cli_prints_aligned_table_by_default(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Without a format override the report is a right-aligned table."""
    monkeypatch.delenv("TALLY_OUTPUT_FORMAT", raising=False)

    exit_code = main([str(fixture_path("transactions/basic.csv"))])
    output = capsys.readouterr().out.splitlines()

    assert exit_code == 0 and output == [
        "client |  available |       held |      total | locked",
        "     1 |     1.5000 |     0.0000 |     1.5000 |  false",
        "     2 |     2.0000 |     0.0000 |     2.0000 |  false",
    ]


def test_cli_skips_deposit_past_balance_ceiling(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """A deposit that would overflow the balance is rejected and the report still prints."""
    source_path = tmp_path / "large.csv"
    source_path.write_text(
        "type,client,tx,amount\ndeposit,1,1,999999999999999\ndeposit,1,2,1.0001\n"
    )

    exit_code = main(["--format", "csv", str(source_path)])
    captured = capsys.readouterr()

    balance = "999999999999999.0000"
    assert (
        exit_code == 0
        and captured.out.splitlines()[1] == f"1,{balance},0.0000,{balance},false"
        and "BalanceLimitError" in captured.err
    )


def test_cli_writes_rejects_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """The --rejects flag should persist skipped rows."""
    rejects_path = tmp_path / "rejects.jsonl"

    exit_code = main(
        ["--rejects", str(rejects_path), str(fixture_path("transactions/malformed.csv"))]
    )
    capsys.readouterr()
    rows = [json.loads(line) for line in rejects_path.read_text().splitlines()]

    assert exit_code == 0 and len(rows) == 9


def test_cli_reports_missing_file_on_stderr(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Fatal errors should exit with status 1 and an error line."""
    exit_code = main([str(tmp_path / "missing.csv")])
    captured = capsys.readouterr()

    assert exit_code == 1 and captured.out == "" and captured.err.startswith("error: ")


def test_cli_reports_invalid_env_config(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Invalid environment config should be a fatal error."""
    monkeypatch.setenv("TALLY_OUTPUT_FORMAT", "xml")

    exit_code = main([str(fixture_path("transactions/basic.csv"))])

    assert exit_code == 1 and "TALLY_OUTPUT_FORMAT" in capsys.readouterr().err


def test_cli_requires_source_or_run_spec() -> None:
    """Calling without a source is a usage error."""
    with pytest.raises(SystemExit) as exit_info:
        main([])

    assert exit_info.value.code == 2


def test_cli_rejects_source_and_run_spec_together() -> None:
    """A source and a run-spec cannot be combined."""
    with pytest.raises(SystemExit) as exit_info:
        main(["a.csv", "--run-spec", "spec.yaml"])

    assert exit_info.value.code == 2
