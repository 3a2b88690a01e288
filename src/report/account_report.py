"""Account report rendering.

This module formats final account snapshots as CSV or an aligned table.
"""

from __future__ import annotations

import csv
import io
from typing import Iterable

from core.amounts import format_amount
from core.constants import OUTPUT_COLUMNS, SUPPORTED_OUTPUT_FORMATS, TABLE_COLUMN_WIDTHS
from core.errors import TallyReportError
from core.types import AccountSnapshot


def render_accounts(accounts: Iterable[AccountSnapshot], output_format: str) -> str:
    """Render account snapshots for printing.

    Args:
        accounts: Snapshots in the order they should appear.
        output_format: ``csv`` or ``table``.

    Returns:
        Rendered report text ending with a newline.

    Raises:
        TallyReportError: If the output format is unsupported.
    """
    rows = [_account_row(account) for account in accounts]
    if output_format == "csv":
        return _render_csv(rows)
    if output_format == "table":
        return _render_table(rows)
    raise TallyReportError(
        f"Unsupported output format '{output_format}'. "
        f"Use one of: {', '.join(SUPPORTED_OUTPUT_FORMATS)}."
    )


def _account_row(account: AccountSnapshot) -> tuple[str, ...]:
    return (
        str(account.client_id),
        format_amount(account.available),
        format_amount(account.held),
        format_amount(account.total),
        "true" if account.locked else "false",
    )


def _render_csv(rows: list[tuple[str, ...]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(OUTPUT_COLUMNS)
    writer.writerows(rows)
    return buffer.getvalue()


def _render_table(rows: list[tuple[str, ...]]) -> str:
    lines = [_table_line(OUTPUT_COLUMNS)]
    lines.extend(_table_line(row) for row in rows)
    return "\n".join(lines) + "\n"


def _table_line(values: tuple[str, ...]) -> str:
    return " | ".join(
        value.rjust(width) for value, width in zip(values, TABLE_COLUMN_WIDTHS)
    )
