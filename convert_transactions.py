"""
Xapo to Kryptosekken Transaction Converter

This script converts the Xapo BTC account and BTC savings CSV exports into a
single kryptosekken-compatible CSV for Norwegian tax reporting. The CSV is
written to standard output unless --output is given; progress goes to stderr.

Usage:
    python convert_transactions.py --btc-account-file ACCOUNT_CSV \
        --btc-savings-file SAVINGS_CSV

Example:
    python convert_transactions.py -a account.csv -s savings.csv > kryptosekken.csv
"""

import argparse
import logging
from pathlib import Path
import sys

from xapo_kryptosekken.exceptions import FileConversionError, OutputWriteError
from xapo_kryptosekken.kryptosekken_formatter import KryptosekkenFormatter
from xapo_kryptosekken.main_processor import XapoTransactionProcessor


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert Xapo transactions to kryptosekken format",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python convert_transactions.py -a account.csv -s savings.csv
  python convert_transactions.py -a account.csv -s savings.csv -o kryptosekken.csv
  python convert_transactions.py -a account.csv -s savings.csv --summary
        """,
    )

    parser.add_argument(
        "--btc-account-file",
        "-a",
        type=Path,
        required=True,
        metavar="BTC_ACCOUNT_FILE",
        help="Xapo BTC account CSV export",
    )

    parser.add_argument(
        "--btc-savings-file",
        "-s",
        type=Path,
        required=True,
        metavar="BTC_SAVINGS_FILE",
        help="Xapo BTC savings CSV export",
    )

    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output CSV file (default: standard output)",
    )

    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print a summary report to stderr",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    # Validate input files exist
    for input_file in (args.btc_account_file, args.btc_savings_file):
        if not input_file.exists():
            print(f"❌ Error: Input file not found: {input_file}", file=sys.stderr)
            return 1

    processor = XapoTransactionProcessor()
    try:
        transactions = processor.process_files(
            args.btc_account_file, args.btc_savings_file
        )
    except FileConversionError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    try:
        if args.output:
            KryptosekkenFormatter.to_csv_file(transactions, args.output)
            logging.info("💾 Generated kryptosekken CSV: %s", args.output)
        else:
            processor.write_output(transactions, sys.stdout)
    except OutputWriteError as e:
        print(f"❌ Error producing CSV: {e}", file=sys.stderr)
        return 1

    if args.summary:
        print(
            KryptosekkenFormatter.generate_summary_report(transactions),
            file=sys.stderr,
        )

    return 0


if __name__ == "__main__":
    sys.exit(main())
