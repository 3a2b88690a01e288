"""Tally exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class TallyError(Exception):
    """Base exception for all Tally failures."""


class TallyConfigError(TallyError):
    """Raised for invalid runtime configuration."""


class TallyIngestError(TallyError):
    """Raised for source reading failures that stop processing."""


class TallyRecordError(TallyIngestError):
    """Raised when a single CSV row cannot be turned into a transaction."""


class TallyLedgerError(TallyError):
    """Raised when a transaction cannot be applied to the ledger."""


class AccountLockedError(TallyLedgerError):
    """Raised for any operation on a frozen account."""


class InsufficientFundsError(TallyLedgerError):
    """Raised when available funds do not cover the requested amount."""


class BalanceLimitError(TallyLedgerError):
    """Raised when a deposit would push an account past the balance ceiling."""


class UnknownAccountError(TallyLedgerError):
    """Raised when a transaction targets a client with no account."""


class UnknownTransactionError(TallyLedgerError):
    """Raised when a dispute-family row references a missing transaction."""


class DuplicateTransactionError(TallyLedgerError):
    """Raised when a deposit or withdrawal reuses a transaction id."""


class ClientMismatchError(TallyLedgerError):
    """Raised when a row references a transaction owned by another client."""


class DisputeStateError(TallyLedgerError):
    """Raised for dispute transitions not allowed from the current state."""


class TallyReportError(TallyError):
    """Raised for output rendering failures."""


class TallyDependencyError(TallyError):
    """Raised when an optional runtime dependency is missing."""


class TallyRunSpecError(TallyError):
    """Raised for invalid or unsupported run-spec configuration."""
