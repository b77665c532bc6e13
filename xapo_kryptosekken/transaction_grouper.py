from collections import defaultdict
from dataclasses import replace
from datetime import date
import logging

from xapo_kryptosekken.constants import SUMMED_INTEREST_NOTE
from xapo_kryptosekken.models import Incoming, KryptosekkenTransaction, TransactionType


class TransactionGrouper:
    """
    Combines the converted BTC account and BTC savings streams.

    Handles:
    1. Daily interest aggregation (savings only)
    2. Unification of both accounts into one chronological stream
    """

    @classmethod
    def merge_daily_interest(
        cls, transactions: list[KryptosekkenTransaction]
    ) -> list[KryptosekkenTransaction]:
        """
        Merge interest paid on the same day into one transaction.

        Xapo pays interest daily for both BTC and USD balances, so an account
        holding both gets two BTC payments within about the same second.
        Days with a single payment are left untouched.

        Returns:
            Merged interest transactions followed by all other transactions
        """
        daily_interest: dict[date, list[KryptosekkenTransaction]] = defaultdict(list)
        other = []
        for tx in transactions:
            if tx.type == TransactionType.INTEREST:
                daily_interest[tx.timestamp.date()].append(tx)
            else:
                other.append(tx)

        merged = []
        for day, tx_list in daily_interest.items():
            if len(tx_list) == 1:
                merged.append(tx_list[0])
                continue

            total = tx_list[0].incoming
            for tx in tx_list[1:]:
                total += tx.incoming
            logging.debug(
                "Merged %d interest payments on %s into %s", len(tx_list), day, total
            )
            # The first payment of the day is the template
            merged.append(
                replace(tx_list[0], flow=Incoming(total), note=SUMMED_INTEREST_NOTE)
            )

        return merged + other

    @classmethod
    def unify_accounts(
        cls,
        btc_account: list[KryptosekkenTransaction],
        btc_savings: list[KryptosekkenTransaction],
    ) -> list[KryptosekkenTransaction]:
        """Unify BTC account and BTC savings into one chronologically sorted list."""
        unified = cls.merge_daily_interest(btc_savings) + btc_account
        # Stable sort keeps input order for identical timestamps
        unified.sort(key=lambda tx: tx.timestamp)
        return unified
