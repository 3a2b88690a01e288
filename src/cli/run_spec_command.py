"""Run-spec CLI command wiring.

This module delegates ``--run-spec`` invocations to the shared run-spec
engine used by CLI and SDK entry points.
"""

from __future__ import annotations

from ledger.tally_sdk import TallyClient


def run_run_spec_command(client: TallyClient, spec_file: str) -> int:
    """Handle run-spec invocation."""
    output_lines = client.run_spec(spec_file)
    for line in output_lines:
        print(line)
    return 0
