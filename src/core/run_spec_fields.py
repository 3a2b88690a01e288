"""Type-safe field parsing helpers for run-spec execution.

This module centralizes primitive parsing so run-spec steps produce
consistent validation errors across CLI and SDK flows.
"""

from __future__ import annotations

from typing import Mapping

from core.constants import SUPPORTED_OUTPUT_FORMATS
from core.errors import TallyRunSpecError


def required_string(args: Mapping[str, object], field_name: str) -> str:
    """Read a required string field from a run-spec step."""
    value = optional_string(args, field_name)
    if value is None:
        raise TallyRunSpecError(f"Run-spec step is missing required field '{field_name}'.")
    return value


def optional_string(args: Mapping[str, object], field_name: str) -> str | None:
    """Read an optional string field from a run-spec step."""
    value = args.get(field_name)
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped if stripped else None
    raise TallyRunSpecError(f"Run-spec field '{field_name}' must be a string when provided.")


def optional_output_format(args: Mapping[str, object], default_value: str) -> str:
    """Read the step output format, falling back to the given default."""
    value = optional_string(args, "output_format")
    if value is None:
        return default_value
    if value in SUPPORTED_OUTPUT_FORMATS:
        return value
    supported_rows = ", ".join(SUPPORTED_OUTPUT_FORMATS)
    raise TallyRunSpecError(f"Invalid output_format '{value}'. Use one of: {supported_rows}.")
