"""Python SDK for transaction processing.

This module exposes the high-level API used by the CLI and by callers
that embed the processor: single-source runs and batch run-specs.
"""

from __future__ import annotations

from dataclasses import replace

from core.config import TallyConfig
from core.run_spec_execution import execute_run_spec_file
from core.types import ProcessOptions, ProcessResult
from ingest.pipeline import process_transactions


class TallyClient:
    """Primary SDK entry point."""

    def __init__(self, config: TallyConfig | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
        """
        self._config = config or TallyConfig.from_env()

    @property
    def config(self) -> TallyConfig:
        """Runtime configuration used by this client."""
        return self._config

    @property
    def default_output_format(self) -> str:
        """Report format applied when a request does not choose one."""
        return self._config.output_format

    def process(self, options: ProcessOptions) -> ProcessResult:
        """Process one transaction source.

        Args:
            options: Processing options.

        Returns:
            Final accounts and rejected rows.

        Raises:
            TallyIngestError: If the source cannot be read.
            TallyReportError: If the rejects file cannot be written.
        """
        return process_transactions(options, self._config)

    def process_file(self, source_uri: str) -> ProcessResult:
        """Process one source using configured defaults.

        Args:
            source_uri: Local CSV path, ``-``, or ``s3://`` URI.

        Returns:
            Final accounts and rejected rows.
        """
        options = ProcessOptions(
            source_uri=source_uri,
            output_format=self._config.output_format,
            rejects_path=self._config.rejects_path,
        )
        return self.process(options)

    def with_output_format(self, output_format: str) -> "TallyClient":
        """Clone the client with a different default report format.

        Args:
            output_format: ``csv`` or ``table``.

        Returns:
            New SDK client instance.
        """
        return TallyClient(replace(self._config, output_format=output_format))

    def run_spec(self, spec_file: str) -> tuple[str, ...]:
        """Execute a YAML run-spec through the shared execution engine.

        Args:
            spec_file: Path to YAML run-spec file.

        Returns:
            Ordered output lines.
        """
        return execute_run_spec_file(self, spec_file)
