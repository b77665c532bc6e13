"""
This module provides a formatter to convert KryptosekkenTransaction objects
into the specific CSV format required for import into the Kryptosekken service.
"""

from collections import defaultdict
import csv
import io
from pathlib import Path
from typing import TextIO, TypeAlias

from xapo_kryptosekken.constants import CSV_HEADERS, is_valid_decimal_precision
from xapo_kryptosekken.exceptions import OutputWriteError
from xapo_kryptosekken.models import KryptosekkenTransaction
from xapo_kryptosekken.money import exact_sum


# Define a clear type alias for lists of transactions for cleaner method signatures
TransactionList: TypeAlias = list[KryptosekkenTransaction]


class KryptosekkenFormatter:
    """
    Formats KryptosekkenTransaction objects into a compliant CSV format.

    The class adheres to the specification from kryptosekken.no, ensuring
    correct headers and data formatting. All methods are class methods,
    making this a stateless utility.
    Reference: https://www.kryptosekken.no/regnskap/importer-csv-generisk
    """

    @classmethod
    def write_csv(
        cls,
        transactions: TransactionList,
        stream: TextIO,
        include_header: bool = True,
    ) -> int:
        """
        Writes transactions to an open text stream.

        Rows already written stay in the stream if a later write fails.

        Returns:
            The number of transaction rows written

        Raises:
            OutputWriteError: If the stream cannot be written to
        """
        writer = csv.DictWriter(stream, fieldnames=CSV_HEADERS)
        written = 0
        try:
            if include_header:
                writer.writeheader()
            for tx in transactions:
                writer.writerow(tx.to_csv_row())
                written += 1
        except (OSError, csv.Error) as e:
            raise OutputWriteError(
                f"Failed after writing {written} transactions: {e}"
            ) from e
        return written

    @classmethod
    def to_csv_file(
        cls, transactions: TransactionList, output_file: Path, encoding: str = "utf-8"
    ) -> None:
        """
        Writes a list of KryptosekkenTransaction objects to a CSV file.

        Args:
            transactions: The list of transactions to write.
            output_file: The path for the output CSV file.
            encoding: The file encoding to use.
        """
        try:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            with output_file.open("w", encoding=encoding, newline="") as f:
                cls.write_csv(transactions, f)
        except OutputWriteError:
            raise
        except OSError as e:
            raise OutputWriteError(f"Cannot write {output_file}: {e}") from e

    @classmethod
    def to_csv_string(
        cls, transactions: TransactionList, include_header: bool = True
    ) -> str:
        """
        Converts a list of KryptosekkenTransaction objects to a CSV formatted string.
        """
        output = io.StringIO()
        cls.write_csv(transactions, output, include_header)
        return output.getvalue()

    @classmethod
    def validate_transaction(cls, tx: KryptosekkenTransaction) -> list[str]:
        """
        Checks a transaction's amounts against Kryptosekken's precision limits.

        Returns:
            A list of validation error messages. The list is empty if valid.
        """
        errors = []
        amounts = [("Inn", tx.incoming), ("Ut", tx.outgoing), ("Gebyr", tx.fee)]
        for name, money in amounts:
            if money is not None and not is_valid_decimal_precision(money.amount):
                errors.append(
                    f"'{name}' ('{money.amount_text}') exceeds precision limits. "
                    "Max is 18 integer digits and 18 decimal places."
                )
        return errors

    @classmethod
    def generate_summary_report(cls, transactions: TransactionList) -> str:
        """
        Generates a human-readable summary report from a list of transactions.
        """
        if not transactions:
            return "No transactions to summarize."

        type_counts = defaultdict(int)
        currency_ins = defaultdict(list)
        currency_outs = defaultdict(list)

        for tx in transactions:
            type_counts[tx.type.label] += 1
            if tx.incoming is not None:
                currency_ins[str(tx.incoming.currency)].append(tx.incoming.amount)
            if tx.outgoing is not None:
                currency_outs[str(tx.outgoing.currency)].append(tx.outgoing.amount)

        min_date = min(tx.timestamp for tx in transactions)
        max_date = max(tx.timestamp for tx in transactions)

        report_lines = [
            "=" * 50,
            "KRYPTOSEKKEN IMPORT SUMMARY",
            "=" * 50,
            f"Total transactions: {len(transactions)}",
            "",
            "Transaction Types:",
            *[
                f"  - {tx_type}: {count}"
                for tx_type, count in sorted(type_counts.items())
            ],
        ]

        if currency_ins:
            report_lines.extend(
                [
                    "",
                    "Currency Totals (Incoming):",
                    *[
                        f"  - {cur}: {exact_sum(amts):f}"
                        for cur, amts in sorted(currency_ins.items())
                    ],
                ]
            )

        if currency_outs:
            report_lines.extend(
                [
                    "",
                    "Currency Totals (Outgoing):",
                    *[
                        f"  - {cur}: {exact_sum(amts):f}"
                        for cur, amts in sorted(currency_outs.items())
                    ],
                ]
            )

        date_range = f"{min_date:%Y-%m-%d} to {max_date:%Y-%m-%d}"
        report_lines.append(f"\nDate range: {date_range}")
        report_lines.append("=" * 50)

        return "\n".join(report_lines)
