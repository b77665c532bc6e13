"""
Minimal money handling: an exact decimal amount tagged with one of the two
currencies Xapo reports in.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import MAX_PREC, Decimal, Inexact, localcontext
from enum import Enum

from xapo_kryptosekken.exceptions import UnknownCurrencyError


class Currency(Enum):
    """Currencies that can appear in a Xapo export"""

    USD = "USD"
    BTC = "BTC"

    @classmethod
    def from_code(cls, code: str) -> "Currency":
        """
        Parse a currency code, ignoring case.

        Raises:
            UnknownCurrencyError: If the code is not USD or BTC
        """
        try:
            return cls(code.upper())
        except ValueError:
            raise UnknownCurrencyError(code) from None

    def __str__(self) -> str:
        return self.value


def parse_currency(code: str) -> Currency:
    return Currency.from_code(code)


def exact_sum(amounts: Iterable[Decimal]) -> Decimal:
    """
    Sum amounts without rounding.

    The default decimal context rounds to 28 significant digits, while Xapo
    amounts are parsed at whatever precision the export carries.
    """
    with localcontext() as ctx:
        ctx.prec = MAX_PREC
        ctx.traps[Inexact] = True
        return sum(amounts, Decimal(0))


@dataclass(frozen=True)
class Money:
    amount: Decimal
    currency: Currency

    @property
    def amount_text(self) -> str:
        """Amount in plain positional notation, trailing zeros kept."""
        return format(self.amount, "f")

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        if other.currency != self.currency:
            raise ValueError(
                f"Cannot add {other.currency} to {self.currency} amounts"
            )
        return Money(exact_sum([self.amount, other.amount]), self.currency)

    def __str__(self) -> str:
        return f"{self.amount_text} {self.currency}"
