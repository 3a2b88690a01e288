"""Tally CLI entry point.

This module maps command-line arguments onto SDK calls: process one
CSV source, or run a batch run-spec. Reports go to stdout and logs to
stderr.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from cli.run_spec_command import run_run_spec_command
from core.config import TallyConfig
from core.constants import SUPPORTED_OUTPUT_FORMATS
from core.errors import TallyError
from core.logging_config import configure_logging
from core.types import ProcessOptions
from ledger.tally_sdk import TallyClient
from report.account_report import render_accounts


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="tally",
        description="Apply a CSV stream of transactions and print final account balances",
    )
    parser.add_argument(
        "source",
        nargs="?",
        help="Transactions CSV file, '-' for stdin, or s3://bucket/key",
    )
    parser.add_argument("--run-spec", help="Process every step of a YAML run-spec file")
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=SUPPORTED_OUTPUT_FORMATS,
        help="Override TALLY_OUTPUT_FORMAT for this command",
    )
    parser.add_argument("--rejects", help="Write rejected rows to this JSONL file")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Tally CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if (args.source is None) == (args.run_spec is None):
        parser.error("provide exactly one of SOURCE or --run-spec")
    try:
        client = _build_client(args.output_format, args.rejects)
        configure_logging(client.config.log_level)
        if args.run_spec:
            return run_run_spec_command(client, args.run_spec)
        return _run_process_command(client, args.source)
    except TallyError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1


def _build_client(output_format: str | None, rejects: str | None) -> TallyClient:
    """Build SDK client with optional flag overrides.

    Args:
        output_format: Optional report format override.
        rejects: Optional rejects file override.

    Returns:
        Configured SDK client.
    """
    config = TallyConfig.from_env()
    if output_format:
        config = replace(config, output_format=output_format)
    if rejects:
        config = replace(config, rejects_path=Path(rejects).expanduser().resolve())
    return TallyClient(config)


def _run_process_command(client: TallyClient, source: str) -> int:
    """Handle a single-source run.

    Args:
        client: SDK client.
        source: Source URI from the command line.

    Returns:
        Exit code.
    """
    options = ProcessOptions(
        source_uri=source,
        output_format=client.config.output_format,
        rejects_path=client.config.rejects_path,
    )
    result = client.process(options)
    sys.stdout.write(render_accounts(result.accounts, options.output_format))
    return 0
