"""Shared typed models.

This module defines the data models used by ingest, ledger, report,
and SDK layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Mapping

from core.constants import DEFAULT_OUTPUT_FORMAT


class TransactionType(str, Enum):
    """Supported transaction kinds, valued by their CSV spelling."""

    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @property
    def moves_funds(self) -> bool:
        """Return whether this kind carries its own amount."""
        return self in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL)


class DisputeState(str, Enum):
    """Dispute lifecycle of a stored transaction."""

    SETTLED = "settled"
    DISPUTED = "disputed"
    CHARGED_BACK = "charged_back"


@dataclass(frozen=True)
class Transaction:
    """One parsed transaction row.

    Attributes:
        tx_type: Transaction kind.
        client_id: Owning client id.
        tx_id: Transaction id; for the dispute family, the referenced id.
        amount: Amount for deposits and withdrawals, otherwise None.
    """

    tx_type: TransactionType
    client_id: int
    tx_id: int
    amount: Decimal | None = None


@dataclass
class StoredTransaction:
    """Deposit or withdrawal kept for dispute lookups."""

    tx_id: int
    client_id: int
    tx_type: TransactionType
    amount: Decimal
    state: DisputeState = DisputeState.SETTLED


@dataclass(frozen=True)
class AccountSnapshot:
    """Point-in-time view of one client account.

    Attributes:
        client_id: Client id.
        available: Funds available for withdrawal.
        held: Funds held by open disputes.
        total: Sum of available and held funds.
        locked: Whether a chargeback froze the account.
    """

    client_id: int
    available: Decimal
    held: Decimal
    total: Decimal
    locked: bool


@dataclass(frozen=True)
class RawRow:
    """One CSV data row before parsing.

    Attributes:
        line_number: One-based line number in the source.
        fields: Trimmed values keyed by lowercase header name.
    """

    line_number: int
    fields: Mapping[str, str]


@dataclass(frozen=True)
class RejectedRecord:
    """A row skipped during processing.

    Attributes:
        line_number: One-based line number in the source.
        reason: Error class name describing the failure kind.
        message: Human-readable failure detail.
        raw: Original row values.
    """

    line_number: int
    reason: str
    message: str
    raw: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ProcessOptions:
    """Processing request options.

    Attributes:
        source_uri: Local CSV path, ``-`` for stdin, or ``s3://`` object URI.
        output_format: Account report format.
        rejects_path: Optional JSONL destination for rejected rows.
    """

    source_uri: str
    output_format: str = DEFAULT_OUTPUT_FORMAT
    rejects_path: Path | None = None


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of one processing run.

    Attributes:
        accounts: Final account snapshots ordered by client id.
        row_count: Number of data rows read.
        applied_count: Number of rows applied to the ledger.
        rejected: Rows skipped, in input order.
    """

    accounts: tuple[AccountSnapshot, ...]
    row_count: int
    applied_count: int
    rejected: tuple[RejectedRecord, ...]

    @property
    def rejected_count(self) -> int:
        """Count rejected rows."""
        return len(self.rejected)
