"""Row-to-transaction parsing.

This module validates one raw CSV row and builds a typed transaction.
Every failure names the offending field so rejected rows are traceable.
"""

from __future__ import annotations

from decimal import Decimal

from core.amounts import parse_amount
from core.constants import (
    AMOUNT_COLUMN,
    CLIENT_COLUMN,
    MAX_CLIENT_ID,
    MAX_TX_ID,
    TX_COLUMN,
    TYPE_COLUMN,
)
from core.errors import TallyRecordError
from core.types import RawRow, Transaction, TransactionType


def parse_transaction(row: RawRow) -> Transaction:
    """Build a transaction from a raw CSV row.

    Args:
        row: Raw row with trimmed values.

    Returns:
        Parsed transaction.

    Raises:
        TallyRecordError: If any field is missing or malformed.
    """
    tx_type = _parse_type(row)
    client_id = _parse_identifier(row, CLIENT_COLUMN, MAX_CLIENT_ID)
    tx_id = _parse_identifier(row, TX_COLUMN, MAX_TX_ID)
    amount = _parse_row_amount(row, tx_type)
    return Transaction(tx_type=tx_type, client_id=client_id, tx_id=tx_id, amount=amount)


def _parse_type(row: RawRow) -> TransactionType:
    raw_type = row.fields.get(TYPE_COLUMN, "").lower()
    try:
        return TransactionType(raw_type)
    except ValueError as error:
        supported = ", ".join(member.value for member in TransactionType)
        raise TallyRecordError(
            f"Line {row.line_number}: unknown transaction type '{raw_type}'. "
            f"Use one of: {supported}."
        ) from error


def _parse_identifier(row: RawRow, column: str, upper_bound: int) -> int:
    raw_value = row.fields.get(column, "")
    if not (raw_value.isascii() and raw_value.isdigit()):
        raise TallyRecordError(
            f"Line {row.line_number}: field '{column}' must be a non-negative integer, "
            f"got '{raw_value}'."
        )
    value = int(raw_value)
    if value > upper_bound:
        raise TallyRecordError(
            f"Line {row.line_number}: field '{column}' value {value} exceeds {upper_bound}."
        )
    return value


def _parse_row_amount(row: RawRow, tx_type: TransactionType) -> Decimal | None:
    # Dispute-family rows reference another transaction; any amount is ignored.
    if not tx_type.moves_funds:
        return None
    raw_amount = row.fields.get(AMOUNT_COLUMN, "")
    if not raw_amount:
        raise TallyRecordError(
            f"Line {row.line_number}: {tx_type.value} requires an '{AMOUNT_COLUMN}' value."
        )
    try:
        return parse_amount(raw_amount)
    except ValueError as error:
        raise TallyRecordError(
            f"Line {row.line_number}: invalid '{AMOUNT_COLUMN}': {error}."
        ) from error
