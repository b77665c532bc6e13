"""
Error types raised while converting Xapo exports.

Every error is fatal for the file being converted: a malformed or unrecognized
row stops the conversion instead of being skipped.
"""

from pathlib import Path


class XapoConversionError(Exception):
    """Base class for all conversion errors."""


# --- Source parsing ---


class XapoParseError(XapoConversionError, ValueError):
    """A Xapo CSV row could not be parsed."""


class CsvStructureError(XapoParseError):
    """The CSV file or row does not have the expected structure."""


class TimeParseError(XapoParseError):
    """A timestamp does not match 'YYYY-MM-DD HH:MM:SS'."""


class DecimalParseError(XapoParseError):
    """An amount is neither a decimal nor a scientific-notation numeral."""


# --- Classification ---


class UnknownCurrencyError(XapoConversionError, ValueError):
    def __init__(self, code: str):
        super().__init__(f"Unknown currency {code}")
        self.code = code


class UnknownTransactionTypeError(XapoConversionError, ValueError):
    def __init__(self, description: str):
        super().__init__(
            f"Unable to parse transaction type for description value {description}"
        )
        self.description = description


class UnsupportedTradeError(XapoConversionError, ValueError):
    def __init__(self, from_currency, to_currency):
        super().__init__(f"Unsupported: Trade from {from_currency} to {to_currency}")
        self.from_currency = from_currency
        self.to_currency = to_currency


class UnsupportedTradeCurrencyError(UnsupportedTradeError, UnknownCurrencyError):
    """An exchange names a currency other than USD or BTC."""

    def __init__(self, code: str, from_code: str, to_code: str):
        XapoConversionError.__init__(
            self,
            f"Unsupported: Trade from {from_code} to {to_code} "
            f"(Unknown currency {code})",
        )
        self.code = code
        self.from_currency = from_code
        self.to_currency = to_code


# --- Output ---


class OutputWriteError(XapoConversionError, OSError):
    """Writing the Kryptosekken CSV failed."""


class FileConversionError(XapoConversionError):
    """Wraps any failure with the path of the file that caused it."""

    def __init__(self, path: Path, cause: Exception):
        super().__init__(f"Error reading {path}: {cause}")
        self.path = path
        self.cause = cause
