from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import TypeAlias

from xapo_kryptosekken.constants import (
    FORBIDDEN_NOTE_CHARACTER,
    MARKET_NAME,
    TIMESTAMP_FORMAT,
)
from xapo_kryptosekken.money import Money


@dataclass(frozen=True)
class XapoTransaction:
    """Represents one row of a Xapo account or savings CSV export"""

    timestamp: datetime
    amount: Decimal
    description: str
    sub_description: str
    row_num: int | None = None  # Source line number, for error reporting

    @property
    def description_words(self) -> list[str]:
        return self.description.split()


class TransactionType(Enum):
    """Kryptosekken transaction types produced from Xapo exports"""

    CONSUMPTION = "consumption"
    INCOME = "income"
    INTEREST = "interest"  # Reported as income, kept apart for daily merging
    TRANSFER_OUT = "transfer_out"

    @property
    def label(self) -> str:
        """Type text used in the Kryptosekken CSV."""
        return KRYPTOSEKKEN_TYPE_LABELS[self]


KRYPTOSEKKEN_TYPE_LABELS: dict[TransactionType, str] = {
    TransactionType.CONSUMPTION: "Forbruk",
    TransactionType.INCOME: "Inntekt",
    TransactionType.INTEREST: "Inntekt",
    TransactionType.TRANSFER_OUT: "Overføring-Ut",
}


@dataclass(frozen=True)
class Incoming:
    money: Money


@dataclass(frozen=True)
class Outgoing:
    money: Money


Flow: TypeAlias = Incoming | Outgoing


@dataclass(frozen=True)
class KryptosekkenTransaction:
    """
    One row of the Kryptosekken import file.

    Direction is carried by the flow variant, so a row can never have both an
    incoming and an outgoing amount. Amounts are always non-negative.
    """

    timestamp: datetime
    type: TransactionType
    flow: Flow | None
    fee: Money | None
    note: str

    @property
    def incoming(self) -> Money | None:
        return self.flow.money if isinstance(self.flow, Incoming) else None

    @property
    def outgoing(self) -> Money | None:
        return self.flow.money if isinstance(self.flow, Outgoing) else None

    def to_csv_row(self) -> dict:
        """Converts the transaction to a dictionary for CSV writing."""
        inn, inn_valuta = _money_columns(self.incoming)
        ut, ut_valuta = _money_columns(self.outgoing)
        gebyr, gebyr_valuta = _money_columns(self.fee)
        return {
            "Tidspunkt": self.timestamp.strftime(TIMESTAMP_FORMAT),
            "Type": self.type.label,
            "Inn": inn,
            "Inn-Valuta": inn_valuta,
            "Ut": ut,
            "Ut-Valuta": ut_valuta,
            "Gebyr": gebyr,
            "Gebyr-Valuta": gebyr_valuta,
            "Marked": MARKET_NAME,
            "Notat": self.note.replace(FORBIDDEN_NOTE_CHARACTER, ""),
        }


def _money_columns(money: Money | None) -> tuple[str, str]:
    if money is None:
        return "", ""
    return money.amount_text, str(money.currency)
