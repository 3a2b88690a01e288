"""Transaction CSV readers.

This module streams raw rows from a local file, stdin, or an S3 object.
It normalizes headers and values into typed raw rows for parsing.
"""

from __future__ import annotations

import codecs
import csv
import sys
from pathlib import Path
from typing import Any, Iterable, Iterator

from core.config import TallyConfig
from core.constants import INPUT_COLUMNS, REQUIRED_COLUMNS, STDIN_SOURCE
from core.errors import TallyDependencyError, TallyIngestError
from core.s3_uri import S3Location, is_s3_uri, parse_s3_uri
from core.types import RawRow


def iter_source_rows(source_uri: str, config: TallyConfig) -> Iterator[RawRow]:
    """Stream raw rows from a transaction source.

    Args:
        source_uri: Local CSV path, ``-`` for stdin, or ``s3://`` URI.
        config: Runtime configuration for S3 session defaults.

    Yields:
        Raw rows in source order.

    Raises:
        TallyIngestError: If the source cannot be opened or read.
    """
    if source_uri == STDIN_SOURCE:
        yield from read_csv_rows(sys.stdin, "<stdin>")
        return
    if is_s3_uri(source_uri):
        yield from _read_s3_rows(source_uri, config)
        return
    yield from _read_local_rows(Path(source_uri).expanduser())


def read_csv_rows(lines: Iterable[str], source_name: str) -> Iterator[RawRow]:
    """Parse CSV text lines into raw rows keyed by header name.

    Args:
        lines: Text lines, with or without trailing newlines.
        source_name: Source label for error messages.

    Yields:
        Raw rows with trimmed values. Blank lines are skipped.

    Raises:
        TallyIngestError: If the header is missing or CSV syntax breaks.
    """
    reader = csv.reader(lines, skipinitialspace=True)
    header: tuple[str, ...] | None = None
    try:
        for values in reader:
            if _is_blank(values):
                continue
            if header is None:
                header = _parse_header(values, source_name)
                continue
            yield RawRow(line_number=reader.line_num, fields=_row_fields(header, values))
    except csv.Error as error:
        raise TallyIngestError(
            f"Failed to parse CSV at {source_name}:{reader.line_num}: {error}. "
            "Fix the CSV syntax and retry."
        ) from error
    except UnicodeDecodeError as error:
        raise TallyIngestError(
            f"Failed to decode {source_name} near line {reader.line_num}: {error.reason}. "
            "Provide UTF-8 encoded input."
        ) from error
    if header is None:
        raise TallyIngestError(
            f"No header row found in {source_name}. "
            f"Expected columns: {', '.join(INPUT_COLUMNS)}."
        )


def _read_local_rows(source_path: Path) -> Iterator[RawRow]:
    """Stream rows from a local CSV file.

    Args:
        source_path: Input file path.

    Yields:
        Raw rows in file order.

    Raises:
        TallyIngestError: If path is missing or unreadable.
    """
    if not source_path.is_file():
        raise TallyIngestError(
            f"Failed to read transactions at {source_path}: no such file. "
            "Provide an existing CSV file."
        )
    try:
        with source_path.open(encoding="utf-8-sig", newline="") as handle:
            yield from read_csv_rows(handle, str(source_path))
    except OSError as error:
        raise TallyIngestError(
            f"Failed to read transactions at {source_path}: {error.strerror}. "
            "Check file permissions and retry."
        ) from error


def _read_s3_rows(source_uri: str, config: TallyConfig) -> Iterator[RawRow]:
    """Stream rows from one S3 object.

    Args:
        source_uri: S3 object URI.
        config: Runtime configuration for region/profile.

    Yields:
        Raw rows in object order.

    Raises:
        TallyIngestError: If the object cannot be fetched.
    """
    location = parse_s3_uri(source_uri)
    s3_client = _create_s3_client(config)
    body = _open_s3_body(s3_client, location)
    lines = codecs.iterdecode(body.iter_lines(keepends=True), "utf-8-sig")
    try:
        yield from read_csv_rows(lines, source_uri)
    finally:
        body.close()


def _create_s3_client(config: TallyConfig) -> Any:
    """Create a boto3 S3 client.

    Args:
        config: Runtime config containing optional profile/region.

    Returns:
        Boto3 S3 client.

    Raises:
        TallyDependencyError: If boto3 is missing.
    """
    try:
        import boto3
    except ImportError as error:
        raise TallyDependencyError(
            "S3 support requires boto3, but it is not installed. "
            "Install boto3 to read s3:// sources."
        ) from error
    session_kwargs = _build_boto3_session_kwargs(config)
    session = boto3.session.Session(**session_kwargs)
    return session.client("s3")


def _build_boto3_session_kwargs(config: TallyConfig) -> dict[str, str]:
    """Build boto3 Session kwargs from config."""
    kwargs: dict[str, str] = {}
    if config.s3_profile:
        kwargs["profile_name"] = config.s3_profile
    if config.s3_region:
        kwargs["region_name"] = config.s3_region
    return kwargs


def _open_s3_body(s3_client: Any, location: S3Location) -> Any:
    """Fetch the streaming body of an S3 object.

    Raises:
        TallyIngestError: If the request fails.
    """
    from botocore.exceptions import BotoCoreError, ClientError

    try:
        response = s3_client.get_object(Bucket=location.bucket, Key=location.key)
    except (BotoCoreError, ClientError) as error:
        raise TallyIngestError(
            f"Failed to fetch s3://{location.bucket}/{location.key}: {error}. "
            "Check the object key and AWS credentials."
        ) from error
    return response["Body"]


def _parse_header(values: list[str], source_name: str) -> tuple[str, ...]:
    """Normalize and validate the header row, dropping a leading BOM.

    Raises:
        TallyIngestError: If a required column is missing.
    """
    header = tuple(value.lstrip("\ufeff").strip().lower() for value in values)
    missing = [column for column in REQUIRED_COLUMNS if column not in header]
    if missing:
        raise TallyIngestError(
            f"Invalid header in {source_name}: missing column(s) {', '.join(missing)}. "
            f"Expected columns: {', '.join(INPUT_COLUMNS)}."
        )
    return header


def _row_fields(header: tuple[str, ...], values: list[str]) -> dict[str, str]:
    """Pair header names with trimmed values; short rows omit trailing keys."""
    return {name: value.strip() for name, value in zip(header, values)}


def _is_blank(values: list[str]) -> bool:
    """Return whether a parsed CSV row has no content."""
    return all(not value.strip() for value in values)
