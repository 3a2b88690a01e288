"""Shared run-spec execution engine for CLI and SDK workflows.

This module maps validated run-spec steps to client operations so
different entry points execute one batch description without drift.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from core.constants import DEFAULT_OUTPUT_FORMAT, STDIN_SOURCE
from core.errors import TallyReportError, TallyRunSpecError
from core.run_spec import RunSpec, RunSpecStep, load_run_spec
from core.run_spec_fields import optional_output_format, optional_string, required_string
from core.types import ProcessOptions, ProcessResult
from report.account_report import render_accounts


class RunSpecClient(Protocol):
    """Client API contract required by run-spec execution."""

    @property
    def default_output_format(self) -> str: ...

    def process(self, options: ProcessOptions) -> ProcessResult: ...


@dataclass(frozen=True)
class RunSpecExecutionContext:
    """In-memory context used to execute run-spec steps."""

    client: RunSpecClient
    output_format: str
    rejects_dir: Path | None


def execute_run_spec_file(client: RunSpecClient, spec_file: str) -> tuple[str, ...]:
    """Load and execute a run-spec file, returning printable output lines."""
    spec = load_run_spec(spec_file)
    return execute_run_spec(client, spec)


def execute_run_spec(client: RunSpecClient, spec: RunSpec) -> tuple[str, ...]:
    """Execute a parsed run-spec object and return output lines."""
    context = RunSpecExecutionContext(
        client=client,
        output_format=spec.defaults.output_format
        or client.default_output_format
        or DEFAULT_OUTPUT_FORMAT,
        rejects_dir=Path(spec.defaults.rejects_dir).expanduser()
        if spec.defaults.rejects_dir
        else None,
    )
    output_lines: list[str] = []
    for step in spec.steps:
        output_lines.extend(_execute_step(context, step))
    return tuple(output_lines)


def _execute_step(context: RunSpecExecutionContext, step: RunSpecStep) -> tuple[str, ...]:
    if step.command == "process":
        return _execute_process_step(context, step)
    if step.command == "validate":
        return (_execute_validate_step(context, step),)
    raise TallyRunSpecError(f"Unsupported run-spec command '{step.command}'.")


def _execute_process_step(
    context: RunSpecExecutionContext,
    step: RunSpecStep,
) -> tuple[str, ...]:
    options = _build_process_options(context, step)
    result = context.client.process(options)
    report = render_accounts(result.accounts, options.output_format)
    output_path = optional_string(step.args, "output")
    if output_path is None:
        return tuple(report.splitlines())
    written_path = _write_report(Path(output_path).expanduser(), report)
    return (f"output_path={written_path}",)


def _execute_validate_step(context: RunSpecExecutionContext, step: RunSpecStep) -> str:
    options = _build_process_options(context, step)
    result = context.client.process(options)
    return (
        f"source={options.source_uri}\t"
        f"rows={result.row_count}\t"
        f"applied={result.applied_count}\t"
        f"rejected={result.rejected_count}"
    )


def _build_process_options(
    context: RunSpecExecutionContext,
    step: RunSpecStep,
) -> ProcessOptions:
    source_uri = required_string(step.args, "source")
    return ProcessOptions(
        source_uri=source_uri,
        output_format=optional_output_format(step.args, context.output_format),
        rejects_path=_resolve_rejects_path(context, step, source_uri),
    )


def _resolve_rejects_path(
    context: RunSpecExecutionContext,
    step: RunSpecStep,
    source_uri: str,
) -> Path | None:
    explicit_path = optional_string(step.args, "rejects")
    if explicit_path:
        return Path(explicit_path).expanduser()
    if context.rejects_dir is None:
        return None
    source_stem = "stdin" if source_uri == STDIN_SOURCE else Path(source_uri).stem
    return context.rejects_dir / f"step{step.number}-{source_stem}.rejects.jsonl"


def _write_report(output_path: Path, report: str) -> Path:
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(report, encoding="utf-8")
    except OSError as error:
        raise TallyReportError(
            f"Failed to write account report to {output_path}: {error.strerror}. "
            "Choose a writable output path."
        ) from error
    return output_path
