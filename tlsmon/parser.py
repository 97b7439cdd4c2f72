"""Parsing of the checker's tab-delimited output."""

import logging
import re

from .errors import InvalidDaysLeftError, MissingFieldsError
from .models import CertRecord

logger = logging.getLogger(__name__)

FIELD_COUNT = 5
VALID_STATUS = "Valid"
DAYS_LEFT_PATTERN = re.compile(r"[+-]?[0-9]+")


def split_fields(line: str) -> list[str]:
    """Split a line on tabs, dropping fields that are blank once stripped."""
    return [field.strip() for field in line.split("\t") if field.strip()]


def parse_status(status: str) -> bool:
    """Only the exact string ``Valid`` counts as valid."""
    return status == VALID_STATUS


def parse_line(line: str, line_no: int) -> CertRecord:
    """Parse a single data line into a record.

    Args:
        line: Raw output line.
        line_no: 1-based line number in the raw checker output, for error messages.

    Returns:
        The parsed record. Fields beyond the fifth are ignored.

    Raises:
        MissingFieldsError: If fewer than five non-blank fields are present.
        InvalidDaysLeftError: If the days-left field is not an integer.
    """
    fields = split_fields(line)
    if len(fields) < FIELD_COUNT:
        raise MissingFieldsError(
            f"Line {line_no} has {len(fields)} fields, expected {FIELD_COUNT}: {line!r}",
            line_no,
            line,
        )

    host, common_name, status, days_left, expire_date = fields[:FIELD_COUNT]
    if not DAYS_LEFT_PATTERN.fullmatch(days_left):
        raise InvalidDaysLeftError(
            f"Line {line_no} has non-numeric days left {days_left!r}: {line!r}",
            line_no,
            line,
        )

    return CertRecord(
        host=host,
        common_name=common_name,
        valid=parse_status(status),
        days_left=int(days_left),
        expire_date=expire_date,
    )


def parse_output(output: str) -> list[CertRecord]:
    """Parse complete checker output.

    Empty lines are discarded, then the first remaining line is treated as
    the header and skipped. Error messages number lines as they appear in
    the raw output.

    Args:
        output: Captured checker standard output.

    Returns:
        One record per data line, in output order.

    Raises:
        ParseError: If any data line is malformed.
    """
    numbered = [(n, line) for n, line in enumerate(output.split("\n"), start=1) if line != ""]

    records = []
    for line_no, line in numbered[1:]:
        record = parse_line(line, line_no)
        logger.debug("Parsed %r", record)
        records.append(record)
    return records
