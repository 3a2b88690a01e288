"""Runtime configuration model for Tally.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_OUTPUT_FORMAT,
    SUPPORTED_LOG_LEVELS,
    SUPPORTED_OUTPUT_FORMATS,
)
from core.errors import TallyConfigError


@dataclass(frozen=True)
class TallyConfig:
    """Validated runtime configuration.

    Attributes:
        output_format: Account report format, ``csv`` or ``table``.
        rejects_path: Optional JSONL file receiving rejected rows.
        log_level: Minimum structured log level written to stderr.
        s3_region: Optional default AWS region for S3 sources.
        s3_profile: Optional AWS profile for boto3 session initialization.
    """

    output_format: str
    rejects_path: Path | None
    log_level: str
    s3_region: str | None
    s3_profile: str | None

    @classmethod
    def from_env(cls) -> "TallyConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            TallyConfigError: If environment values are invalid.
        """
        output_format = _parse_choice(
            "TALLY_OUTPUT_FORMAT",
            os.getenv("TALLY_OUTPUT_FORMAT", DEFAULT_OUTPUT_FORMAT),
            SUPPORTED_OUTPUT_FORMATS,
        )
        log_level = _parse_choice(
            "TALLY_LOG_LEVEL",
            os.getenv("TALLY_LOG_LEVEL", DEFAULT_LOG_LEVEL),
            SUPPORTED_LOG_LEVELS,
        )
        rejects_value = os.getenv("TALLY_REJECTS_PATH")
        return cls(
            output_format=output_format,
            rejects_path=Path(rejects_value).expanduser().resolve() if rejects_value else None,
            log_level=log_level,
            s3_region=os.getenv("TALLY_S3_REGION"),
            s3_profile=os.getenv("TALLY_S3_PROFILE"),
        )


def _parse_choice(variable: str, raw_value: str, choices: tuple[str, ...]) -> str:
    """Validate an enumerated environment value.

    Args:
        variable: Environment variable name for error context.
        raw_value: Raw string from environment.
        choices: Accepted lowercase values.

    Returns:
        Normalized lowercase value.

    Raises:
        TallyConfigError: If value is not one of the choices.
    """
    normalized = raw_value.strip().lower()
    if normalized in choices:
        return normalized
    raise TallyConfigError(
        f"Invalid {variable} value: expected one of {', '.join(choices)}, "
        f"got '{raw_value}'. Set {variable} to a supported value."
    )
