from datetime import datetime
from decimal import Decimal

import pytest

from xapo_kryptosekken.models import XapoTransaction


XAPO_HEADER = "timestamp,amount,description,sub_description,counterparty\n"


@pytest.fixture
def make_xapo_transaction():
    """Factory for XapoTransaction objects with sensible defaults"""

    def _make(
        description: str,
        amount: str = "-0.5",
        sub_description: str = "",
        timestamp: datetime = datetime(2024, 1, 12, 10, 11, 12),
    ) -> XapoTransaction:
        return XapoTransaction(
            timestamp=timestamp,
            amount=Decimal(amount),
            description=description,
            sub_description=sub_description,
        )

    return _make


@pytest.fixture
def sample_xapo_csv_row():
    """Sample Xapo CSV row fields for testing"""
    return [
        "2024-01-12 10:11:12",
        "-0.00125",
        "Sent BTC",
        "To bc1qexampleaddress",
        "bc1qexampleaddress",
    ]


@pytest.fixture
def btc_account_csv(tmp_path):
    """Xapo BTC account export with a payment, a cashback and an internal move"""
    input_file = tmp_path / "btc_account.csv"
    input_file.write_text(
        XAPO_HEADER
        + "2024-01-10 08:00:00,-0.001,Sent BTC,To bc1qexample,bc1qexample\n"
        + "2024-01-12 18:30:00,0.00002,Card Cashback Redemption,Coffee shop,\n"
        + "2024-01-13 09:00:00,0.5,Move BTC savings to BTC wallet,Internal,\n",
        encoding="utf-8",
    )
    return input_file


@pytest.fixture
def btc_savings_csv(tmp_path):
    """Xapo BTC savings export with two interest payments on the same day"""
    input_file = tmp_path / "btc_savings.csv"
    input_file.write_text(
        XAPO_HEADER
        + "2024-01-12 00:00:01,0.00000100,Daily BTC interest,Interest 3.9% APY,\n"
        + "2024-01-12 00:00:02,1.2E-7,Daily USD interest,Interest 4% APY,\n"
        + "2024-01-13 00:00:01,0.00000101,Daily BTC interest,Interest 3.9% APY,\n",
        encoding="utf-8",
    )
    return input_file
