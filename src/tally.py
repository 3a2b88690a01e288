"""Public SDK surface for Tally.

This module provides a stable import path for embedding users.
It re-exports the client, typed models, and core building blocks.
"""

from __future__ import annotations

from core.config import TallyConfig
from core.types import (
    AccountSnapshot,
    ProcessOptions,
    ProcessResult,
    RejectedRecord,
    Transaction,
    TransactionType,
)
from ingest.pipeline import process_transactions
from ledger.engine import LedgerEngine
from ledger.tally_sdk import TallyClient
from report.account_report import render_accounts

__all__ = [
    "AccountSnapshot",
    "LedgerEngine",
    "ProcessOptions",
    "ProcessResult",
    "RejectedRecord",
    "TallyClient",
    "TallyConfig",
    "Transaction",
    "TransactionType",
    "process_transactions",
    "render_accounts",
]
