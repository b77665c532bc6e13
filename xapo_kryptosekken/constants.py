"""
Shared constants and validation functions for Xapo to Kryptosekken conversion.

This module centralizes the output format, the source format patterns and the
precision rules used across the reader, mapper and formatter.
"""

from decimal import Decimal
import re


# --- Kryptosekken CSV Format Constants ---

CSV_HEADERS = [
    "Tidspunkt",
    "Type",
    "Inn",
    "Inn-Valuta",
    "Ut",
    "Ut-Valuta",
    "Gebyr",
    "Gebyr-Valuta",
    "Marked",
    "Notat",
]

# Value of the "Marked" column for every row
MARKET_NAME = "Xapo"

# Kryptosekken uses '|' internally and rejects it in the note column
FORBIDDEN_NOTE_CHARACTER = "|"

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# --- Xapo CSV Format Constants ---

# timestamp, amount, description, sub_description[, counterparty]
MIN_XAPO_FIELDS = 4

# Pre-compiled regex for performance; ASCII digits only
TIMESTAMP_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", re.ASCII)
DECIMAL_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)", re.ASCII)
SCIENTIFIC_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)[eE][+-]?\d+", re.ASCII)

# --- Note Constants ---

TRANSFER_OUT_NOTE_PREFIX = "CHECK! sub_descr="
SUMMED_INTEREST_NOTE = "Summed daily interest"

# --- Validation Constants ---

# Precision limits
MAX_DECIMAL_INTEGER_DIGITS = 18
MAX_DECIMAL_PLACES = 18


# --- Validation Functions ---


def is_valid_decimal_precision(amount: Decimal) -> bool:
    """Check if decimal meets kryptosekken precision requirements (max 18+18)."""
    sign, digits, exponent = amount.as_tuple()

    # Calculate integer and decimal parts
    num_digits = len(digits)
    decimal_places = -exponent if exponent < 0 else 0
    integer_digits = (
        num_digits + exponent if exponent >= 0 else max(0, num_digits + exponent)
    )

    return (
        integer_digits <= MAX_DECIMAL_INTEGER_DIGITS
        and decimal_places <= MAX_DECIMAL_PLACES
    )
