"""Core constants used across Tally modules.

This module centralizes column names, precision, and defaults.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from decimal import Decimal

TYPE_COLUMN = "type"
CLIENT_COLUMN = "client"
TX_COLUMN = "tx"
AMOUNT_COLUMN = "amount"
REQUIRED_COLUMNS = (TYPE_COLUMN, CLIENT_COLUMN, TX_COLUMN)
INPUT_COLUMNS = (TYPE_COLUMN, CLIENT_COLUMN, TX_COLUMN, AMOUNT_COLUMN)
OUTPUT_COLUMNS = ("client", "available", "held", "total", "locked")
STDIN_SOURCE = "-"
AMOUNT_DECIMAL_PLACES = 4
AMOUNT_QUANTUM = Decimal(1).scaleb(-AMOUNT_DECIMAL_PLACES)
ZERO_AMOUNT = Decimal("0").quantize(AMOUNT_QUANTUM)
MAX_BALANCE = Decimal(10) ** 15 - AMOUNT_QUANTUM
MAX_CLIENT_ID = 2**16 - 1
MAX_TX_ID = 2**32 - 1
DEFAULT_OUTPUT_FORMAT = "table"
SUPPORTED_OUTPUT_FORMATS = ("csv", "table")
DEFAULT_LOG_LEVEL = "warning"
SUPPORTED_LOG_LEVELS = ("debug", "info", "warning", "error")
TABLE_COLUMN_WIDTHS = (6, 10, 10, 10, 6)
