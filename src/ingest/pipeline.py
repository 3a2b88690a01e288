"""Transaction processing orchestration.

This module streams source rows through parsing and the ledger engine
in one ordered pass. Faulty rows are logged, collected, and skipped so
the rest of the stream still applies.
"""

from __future__ import annotations

from core.config import TallyConfig
from core.errors import TallyLedgerError, TallyRecordError
from core.logging_config import get_logger
from core.types import ProcessOptions, ProcessResult, RawRow, RejectedRecord
from ingest.input_reader import iter_source_rows
from ingest.record_parser import parse_transaction
from ledger.engine import LedgerEngine
from report.rejects_log import write_rejects_jsonl

_LOGGER = get_logger(__name__)


class ProcessingPipelineRunner:
    """Stateful runner for one single-pass processing run."""

    def __init__(self, options: ProcessOptions, config: TallyConfig) -> None:
        self._options = options
        self._config = config
        self._engine = LedgerEngine()
        self._rejected: list[RejectedRecord] = []
        self._row_count = 0
        self._applied_count = 0

    def run(self) -> ProcessResult:
        """Execute the pipeline and return final account state."""
        for row in iter_source_rows(self._options.source_uri, self._config):
            self._row_count += 1
            self._process_row(row)
        self._write_rejects_if_requested()
        result = ProcessResult(
            accounts=self._engine.accounts(),
            row_count=self._row_count,
            applied_count=self._applied_count,
            rejected=tuple(self._rejected),
        )
        _log_processing_completion(self._options, result, self._engine.history_size)
        return result

    def _process_row(self, row: RawRow) -> None:
        try:
            transaction = parse_transaction(row)
            self._engine.apply(transaction)
        except (TallyRecordError, TallyLedgerError) as error:
            self._reject(row, error)
            return
        self._applied_count += 1

    def _reject(self, row: RawRow, error: Exception) -> None:
        record = RejectedRecord(
            line_number=row.line_number,
            reason=type(error).__name__,
            message=str(error),
            raw=dict(row.fields),
        )
        self._rejected.append(record)
        _LOGGER.warning(
            "transaction_rejected",
            source_uri=self._options.source_uri,
            line_number=record.line_number,
            reason=record.reason,
            message=record.message,
        )

    def _write_rejects_if_requested(self) -> None:
        if self._options.rejects_path is None:
            return
        written = write_rejects_jsonl(self._options.rejects_path, self._rejected)
        _LOGGER.info(
            "rejects_written",
            rejects_path=str(self._options.rejects_path),
            rejected_count=written,
        )


def process_transactions(options: ProcessOptions, config: TallyConfig) -> ProcessResult:
    """Run the processing pipeline over one source.

    Args:
        options: Processing request options.
        config: Runtime configuration.

    Returns:
        Final accounts plus row and rejection counts.

    Raises:
        TallyIngestError: If the source cannot be read.
        TallyReportError: If the rejects file cannot be written.
    """
    runner = ProcessingPipelineRunner(options, config)
    return runner.run()


def _log_processing_completion(
    options: ProcessOptions,
    result: ProcessResult,
    history_size: int,
) -> None:
    """Log pipeline completion with contextual metadata."""
    _LOGGER.info(
        "processing_completed",
        source_uri=options.source_uri,
        row_count=result.row_count,
        applied_count=result.applied_count,
        rejected_count=result.rejected_count,
        account_count=len(result.accounts),
        history_size=history_size,
    )
