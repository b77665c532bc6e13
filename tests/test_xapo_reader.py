from datetime import datetime
from decimal import Decimal

import pytest

from xapo_kryptosekken.exceptions import (
    CsvStructureError,
    DecimalParseError,
    TimeParseError,
    XapoParseError,
)
from xapo_kryptosekken.xapo_reader import (
    parse_decimal,
    parse_timestamp,
    parse_xapo_row,
    read_xapo_file,
)


class TestParseTimestamp:
    def test_valid_timestamp(self):
        assert parse_timestamp("2024-01-12 10:11:12") == datetime(
            2024, 1, 12, 10, 11, 12
        )

    @pytest.mark.parametrize(
        "text",
        [
            "2024-1-12 10:11:12",  # Single digit month
            "2024-01-12T10:11:12",  # ISO separator
            "2024-01-12 10:11",  # Missing seconds
            "2024-01-12 10:11:12+01:00",  # Timezone
            "2024-01-12",
            "2024-13-12 10:11:12",  # Invalid month
            "2024-02-30 10:11:12",  # Invalid day
            "\uff12\uff10\uff12\uff14-01-12 10:11:12",  # Full-width digits
            "",
        ],
    )
    def test_invalid_timestamps(self, text):
        with pytest.raises(TimeParseError):
            parse_timestamp(text)


class TestParseDecimal:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("0.5", Decimal("0.5")),
            ("-0.00125", Decimal("-0.00125")),
            ("+1", Decimal("1")),
            ("0.00000001", Decimal("0.00000001")),
            ("1.2E-5", Decimal("0.000012")),
            ("-3e-8", Decimal("-0.00000003")),
        ],
    )
    def test_valid_amounts(self, text, expected):
        assert parse_decimal(text) == expected

    def test_plain_decimal_keeps_exponent(self):
        """Trailing zeros are significant for the output text"""
        assert str(parse_decimal("1.0")) == "1.0"

    @pytest.mark.parametrize(
        "text",
        [
            "abc",
            "",
            "NaN",
            "Infinity",
            "1,5",
            " 1.0",
            "1.2E",
            "E5",
            "\u0661.\u0665",  # Arabic-Indic digits
        ],
    )
    def test_invalid_amounts(self, text):
        with pytest.raises(DecimalParseError):
            parse_decimal(text)


class TestParseXapoRow:
    def test_parse_row_ignores_counterparty(self, sample_xapo_csv_row):
        tx = parse_xapo_row(sample_xapo_csv_row, row_num=2)

        assert tx.timestamp == datetime(2024, 1, 12, 10, 11, 12)
        assert tx.amount == Decimal("-0.00125")
        assert tx.description == "Sent BTC"
        assert tx.sub_description == "To bc1qexampleaddress"
        assert tx.row_num == 2

    def test_parse_row_without_counterparty(self, sample_xapo_csv_row):
        tx = parse_xapo_row(sample_xapo_csv_row[:4])
        assert tx.sub_description == "To bc1qexampleaddress"
        assert tx.row_num is None

    def test_fields_copied_verbatim(self):
        tx = parse_xapo_row(["2024-01-12 10:11:12", "1", " Sent BTC ", " detail "])
        assert tx.description == " Sent BTC "
        assert tx.sub_description == " detail "

    def test_too_few_fields(self):
        with pytest.raises(CsvStructureError, match="at least 4 fields"):
            parse_xapo_row(["2024-01-12 10:11:12", "1", "Sent BTC"])

    def test_errors_are_parse_errors(self):
        with pytest.raises(XapoParseError):
            parse_xapo_row(["yesterday", "1", "Sent BTC", ""])
        with pytest.raises(XapoParseError):
            parse_xapo_row(["2024-01-12 10:11:12", "one", "Sent BTC", ""])


class TestReadXapoFile:
    def test_read_file(self, btc_savings_csv):
        transactions = read_xapo_file(btc_savings_csv)

        assert len(transactions) == 3
        assert transactions[1].amount == Decimal("1.2E-7")
        assert transactions[1].description == "Daily USD interest"
        assert [tx.row_num for tx in transactions] == [2, 3, 4]

    def test_read_header_only_file(self, tmp_path):
        input_file = tmp_path / "empty.csv"
        input_file.write_text("timestamp,amount,description,sub_description\n")

        assert read_xapo_file(input_file) == []

    def test_read_empty_file(self, tmp_path):
        input_file = tmp_path / "empty.csv"
        input_file.write_text("")

        assert read_xapo_file(input_file) == []

    def test_quoted_fields(self, tmp_path):
        input_file = tmp_path / "quoted.csv"
        input_file.write_text(
            "timestamp,amount,description,sub_description\n"
            '2024-01-12 10:11:12,-0.1,Exchange BTC to USD,"Shop, Oslo"\n'
        )

        transactions = read_xapo_file(input_file)

        assert transactions[0].sub_description == "Shop, Oslo"

    def test_error_reports_row_number(self, tmp_path):
        input_file = tmp_path / "bad.csv"
        input_file.write_text(
            "timestamp,amount,description,sub_description\n"
            "2024-01-12 10:11:12,0.1,Daily BTC interest,\n"
            "2024-01-13 10:11:12,lots,Daily BTC interest,\n"
        )

        with pytest.raises(DecimalParseError, match="Row 3"):
            read_xapo_file(input_file)

    def test_short_row_fails(self, tmp_path):
        input_file = tmp_path / "short.csv"
        input_file.write_text(
            "timestamp,amount,description,sub_description\n2024-01-12 10:11:12,0.1\n"
        )

        with pytest.raises(CsvStructureError, match="Row 2"):
            read_xapo_file(input_file)

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            read_xapo_file(tmp_path / "missing.csv")

    def test_non_utf8_file(self, tmp_path):
        input_file = tmp_path / "latin1.csv"
        input_file.write_bytes(
            b"timestamp,amount,description,sub_description\n"
            b"2024-01-12 10:11:12,-0.1,Exchange BTC to USD,caf\xe9\n"
        )

        with pytest.raises(CsvStructureError, match="UTF-8"):
            read_xapo_file(input_file)
