import logging
from pathlib import Path
from typing import Any, TextIO

from xapo_kryptosekken.exceptions import FileConversionError, XapoConversionError
from xapo_kryptosekken.kryptosekken_formatter import KryptosekkenFormatter
from xapo_kryptosekken.models import KryptosekkenTransaction
from xapo_kryptosekken.operation_mapper import OperationMapper
from xapo_kryptosekken.transaction_grouper import TransactionGrouper
from xapo_kryptosekken.xapo_reader import read_xapo_file


class XapoTransactionProcessor:
    """Main processor for Xapo to kryptosekken conversion."""

    def __init__(self):
        # Processing statistics
        self.stats = {
            "account_transactions": 0,
            "savings_transactions": 0,
            "dropped_transactions": 0,
            "output_transactions": 0,
            "validation_warnings": [],
        }

    def convert_file(self, input_file: Path) -> list[KryptosekkenTransaction]:
        """
        Read and convert one Xapo export.

        Raises:
            FileConversionError: Naming the file, for any read or conversion error
        """
        try:
            xapo_transactions = read_xapo_file(input_file)
            converted = OperationMapper.convert_transactions(xapo_transactions)
        except (OSError, XapoConversionError) as e:
            raise FileConversionError(input_file, e) from e

        dropped = len(xapo_transactions) - len(converted)
        self.stats["dropped_transactions"] += dropped
        logging.info(
            "🔄 Converted %d transactions from %s (%d internal moves dropped)",
            len(converted),
            input_file,
            dropped,
        )
        return converted

    def process_files(
        self, btc_account_file: Path, btc_savings_file: Path
    ) -> list[KryptosekkenTransaction]:
        """
        Convert both Xapo exports into one chronological list.

        Args:
            btc_account_file: Xapo BTC account (checking) export
            btc_savings_file: Xapo BTC savings export

        Returns:
            The unified kryptosekken transactions
        """
        logging.info("🚀 Starting Xapo transaction processing...")

        btc_account = self.convert_file(btc_account_file)
        self.stats["account_transactions"] = len(btc_account)
        btc_savings = self.convert_file(btc_savings_file)
        self.stats["savings_transactions"] = len(btc_savings)

        logging.info("🔗 Merging daily interest and unifying accounts...")
        unified = TransactionGrouper.unify_accounts(btc_account, btc_savings)
        self.stats["output_transactions"] = len(unified)

        for i, tx in enumerate(unified, start=1):
            for warning in KryptosekkenFormatter.validate_transaction(tx):
                message = f"Transaction {i}: {warning}"
                self.stats["validation_warnings"].append(message)
                logging.warning("⚠️  %s", message)

        logging.info("✨ Processing complete: %d transactions", len(unified))
        return unified

    def write_output(
        self, transactions: list[KryptosekkenTransaction], output: TextIO
    ) -> int:
        return KryptosekkenFormatter.write_csv(transactions, output)

    def get_statistics(self) -> dict[str, Any]:
        return self.stats.copy()
