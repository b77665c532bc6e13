"""
Reads Xapo CSV exports faithfully, without any transformation.

Each export has a header line followed by rows of
``timestamp,amount,description,sub_description[,counterparty]``.
The counterparty column is ignored.
"""

from collections.abc import Iterable, Sequence
import csv
from datetime import datetime
from decimal import Decimal, InvalidOperation
import logging
from pathlib import Path

from xapo_kryptosekken.constants import (
    DECIMAL_PATTERN,
    MIN_XAPO_FIELDS,
    SCIENTIFIC_PATTERN,
    TIMESTAMP_FORMAT,
    TIMESTAMP_PATTERN,
)
from xapo_kryptosekken.exceptions import (
    CsvStructureError,
    DecimalParseError,
    TimeParseError,
    XapoParseError,
)
from xapo_kryptosekken.models import XapoTransaction


def parse_timestamp(text: str) -> datetime:
    """Parse a 'YYYY-MM-DD HH:MM:SS' timestamp (no timezone)."""
    if not TIMESTAMP_PATTERN.fullmatch(text):
        raise TimeParseError(
            f"Invalid timestamp '{text}', expected YYYY-MM-DD HH:MM:SS"
        )
    try:
        return datetime.strptime(text, TIMESTAMP_FORMAT)
    except ValueError as e:
        raise TimeParseError(f"Invalid timestamp '{text}': {e}") from e


def parse_decimal(text: str) -> Decimal:
    """
    Parse an amount exactly.

    Xapo mostly writes plain decimals but occasionally emits scientific
    notation such as ``1.2E-5``, so both forms are accepted.
    """
    for pattern in (DECIMAL_PATTERN, SCIENTIFIC_PATTERN):
        if pattern.fullmatch(text):
            try:
                return Decimal(text)
            except InvalidOperation as e:
                raise DecimalParseError(f"Invalid amount '{text}'") from e
    raise DecimalParseError(f"Invalid amount '{text}'")


def parse_xapo_row(
    fields: Sequence[str], row_num: int | None = None
) -> XapoTransaction:
    """
    Create a XapoTransaction from the ordered fields of one CSV row.

    Raises:
        CsvStructureError: If the row has fewer than four fields
        TimeParseError: If the timestamp is malformed
        DecimalParseError: If the amount is malformed
    """
    if len(fields) < MIN_XAPO_FIELDS:
        raise CsvStructureError(
            f"Expected at least {MIN_XAPO_FIELDS} fields, found {len(fields)}"
        )
    return XapoTransaction(
        timestamp=parse_timestamp(fields[0]),
        amount=parse_decimal(fields[1]),
        description=fields[2],
        sub_description=fields[3],
        row_num=row_num,
    )


def parse_xapo_rows(rows: Iterable[Sequence[str]]) -> list[XapoTransaction]:
    """Parse data rows (header already removed); line numbers start at 2."""
    transactions = []
    for row_num, fields in enumerate(rows, start=2):  # Start at 2 for header
        if not fields:
            continue
        try:
            transactions.append(parse_xapo_row(fields, row_num))
        except XapoParseError as e:
            raise type(e)(f"Row {row_num}: {e}") from e
    return transactions


def read_xapo_file(input_file: Path) -> list[XapoTransaction]:
    """Load all transactions from a Xapo CSV export."""
    with open(input_file, encoding="utf-8-sig", newline="") as f:
        reader = csv.reader(f)
        try:
            header = next(reader, None)
            if header is None:
                logging.warning("Empty Xapo file: %s", input_file)
                return []
            transactions = parse_xapo_rows(reader)
        except csv.Error as e:
            raise CsvStructureError(f"Line {reader.line_num}: {e}") from e
        except UnicodeDecodeError as e:
            raise CsvStructureError(f"Not valid UTF-8: {e}") from e

    logging.info("📖 Loaded %d transactions from %s", len(transactions), input_file)
    return transactions
