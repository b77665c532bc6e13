from collections.abc import Callable, Iterable
import logging

from xapo_kryptosekken.constants import TRANSFER_OUT_NOTE_PREFIX
from xapo_kryptosekken.exceptions import (
    UnknownCurrencyError,
    UnknownTransactionTypeError,
    UnsupportedTradeCurrencyError,
    UnsupportedTradeError,
    XapoConversionError,
)
from xapo_kryptosekken.models import (
    Incoming,
    KryptosekkenTransaction,
    Outgoing,
    TransactionType,
    XapoTransaction,
)
from xapo_kryptosekken.money import Currency, Money, parse_currency


RuleHandler = Callable[[XapoTransaction], KryptosekkenTransaction | None]


def _btc(tx: XapoTransaction) -> Money:
    # Xapo amounts are always BTC, whatever currency the description names
    return Money(tx.amount.copy_abs(), Currency.BTC)


def _transfer_out(tx: XapoTransaction) -> KryptosekkenTransaction:
    """
    Xapo's exports do not say whether outgoing BTC paid for something or moved
    to another wallet the client controls. These rows are marked as transfers
    out and flagged so the user can adjust them in the CSV output.
    """
    return KryptosekkenTransaction(
        timestamp=tx.timestamp,
        type=TransactionType.TRANSFER_OUT,
        flow=Outgoing(_btc(tx)),
        fee=None,
        note=f"{TRANSFER_OUT_NOTE_PREFIX}{tx.sub_description}",
    )


def _income(
    tx: XapoTransaction, note: str, tx_type: TransactionType = TransactionType.INCOME
) -> KryptosekkenTransaction:
    return KryptosekkenTransaction(
        timestamp=tx.timestamp,
        type=tx_type,
        flow=Incoming(_btc(tx)),
        fee=None,
        note=note,
    )


def _interest(tx: XapoTransaction) -> KryptosekkenTransaction:
    # "Daily USD interest" -> "USD"
    currency_code = tx.description_words[1]
    return _income(
        tx, f"{currency_code} {tx.sub_description}", TransactionType.INTEREST
    )


def _cashback(tx: XapoTransaction) -> KryptosekkenTransaction:
    return _income(tx, f"Cashback ({tx.sub_description})")


def _internal_move(tx: XapoTransaction) -> None:
    """Moves between the client's own Xapo accounts are not taxable events."""
    return None


def _consumption(tx: XapoTransaction) -> KryptosekkenTransaction:
    # "Exchange BTC to USD"
    words = tx.description_words
    if len(words) < 4:
        raise UnknownTransactionTypeError(tx.description)
    try:
        from_currency = parse_currency(words[1])
        to_currency = parse_currency(words[3])
    except UnknownCurrencyError as e:
        raise UnsupportedTradeCurrencyError(e.code, words[1], words[3]) from e
    if from_currency != Currency.BTC and to_currency != Currency.USD:
        raise UnsupportedTradeError(from_currency, to_currency)

    return KryptosekkenTransaction(
        timestamp=tx.timestamp,
        type=TransactionType.CONSUMPTION,
        flow=Outgoing(_btc(tx)),
        fee=None,
        note=tx.sub_description,
    )


class OperationMapper:
    """
    Maps Xapo transaction descriptions to kryptosekken transactions.

    Xapo's description texts are an undocumented vocabulary, so the mapping is
    a closed table: exact descriptions first, then prefixes in order. Anything
    else is rejected rather than guessed at.
    """

    EXACT_RULES: dict[str, RuleHandler] = {
        "Lightning network transaction": _transfer_out,
        "Sent BTC": _transfer_out,
        "Daily USD interest": _interest,
        "Daily BTC interest": _interest,
        "Card Cashback Redemption": _cashback,
    }

    PREFIX_RULES: list[tuple[str, RuleHandler]] = [
        ("Move ", _internal_move),
        ("Exchange ", _consumption),
    ]

    @classmethod
    def match_rule(cls, description: str) -> RuleHandler:
        """
        Find the rule handling a Xapo description.

        Raises:
            UnknownTransactionTypeError: If no rule matches
        """
        if description in cls.EXACT_RULES:
            return cls.EXACT_RULES[description]

        for prefix, handler in cls.PREFIX_RULES:
            if description.startswith(prefix):
                return handler

        raise UnknownTransactionTypeError(description)

    @classmethod
    def convert_transaction(
        cls, tx: XapoTransaction
    ) -> KryptosekkenTransaction | None:
        """
        Convert one Xapo transaction.

        Returns:
            The kryptosekken transaction, or None for rows that are dropped
        """
        return cls.match_rule(tx.description)(tx)

    @classmethod
    def convert_transactions(
        cls, transactions: Iterable[XapoTransaction]
    ) -> list[KryptosekkenTransaction]:
        """Convert in input order, omitting dropped rows. The first error aborts."""
        converted = []
        for tx in transactions:
            try:
                ks_tx = cls.convert_transaction(tx)
            except XapoConversionError:
                logging.error(
                    "Row %s could not be converted: %r", tx.row_num, tx.description
                )
                raise
            if ks_tx is not None:
                converted.append(ks_tx)
        return converted
