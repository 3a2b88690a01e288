"""Rejected-row persistence.

This module writes skipped rows to JSONL so faulty input can be
inspected after a run instead of only appearing in the log stream.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from core.errors import TallyReportError
from core.types import RejectedRecord


def rejected_record_to_payload(record: RejectedRecord) -> dict[str, object]:
    """Serialize a rejected record into a JSON-safe payload.

    Args:
        record: Rejected row.

    Returns:
        Dictionary payload for JSON encoding.
    """
    return {
        "line_number": record.line_number,
        "reason": record.reason,
        "message": record.message,
        "raw": dict(record.raw),
    }


def write_rejects_jsonl(rejects_path: Path, records: Iterable[RejectedRecord]) -> int:
    """Write rejected rows to a JSONL file.

    Args:
        rejects_path: Output JSONL file path; parents are created.
        records: Rejected rows in input order.

    Returns:
        Number of rows written.

    Raises:
        TallyReportError: If the file cannot be written.
    """
    lines = [
        json.dumps(rejected_record_to_payload(record), sort_keys=True) for record in records
    ]
    try:
        rejects_path.parent.mkdir(parents=True, exist_ok=True)
        rejects_path.write_text(
            "\n".join(lines) + "\n" if lines else "", encoding="utf-8"
        )
    except OSError as error:
        raise TallyReportError(
            f"Failed to write rejected rows to {rejects_path}: {error.strerror}. "
            "Choose a writable rejects path."
        ) from error
    return len(lines)
