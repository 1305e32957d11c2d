"""Tests for date and amount parsing utilities."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from ledgerlink.utils.amount_parser import format_amount_key, parse_amount, parse_statement_amount
from ledgerlink.utils.date_parser import parse_date, parse_french_date


class TestParseFrenchDate:
    """Tests for DD/MM/YYYY statement dates."""

    def test_parse_french_date(self):
        result = parse_french_date("13/08/2025")

        assert result.year == 2025
        assert result.month - 1 == 7  # August, zero-based
        assert result.day == 13

    def test_first_of_january(self):
        assert parse_french_date("01/01/2024") == date(2024, 1, 1)

    def test_surrounding_whitespace(self):
        assert parse_french_date(" 29/02/2024 ") == date(2024, 2, 29)

    @pytest.mark.parametrize("value", ["2025-08-13", "1/8/2025", "13/08/2025x", "32/01/2025", "29/02/2025"])
    def test_rejects_invalid(self, value):
        with pytest.raises(ValueError):
            parse_french_date(value)


class TestParseDate:
    """Tests for user-supplied CLI dates."""

    def test_iso_date(self):
        assert parse_date("2024-01-15") == date(2024, 1, 15)
        assert parse_date("2025-09-01") == date(2025, 9, 1)

    def test_invalid_iso_date(self):
        with pytest.raises(ValueError):
            parse_date("2025-02-30")

    def test_day_first_date(self):
        assert parse_date("15/01/2024") == date(2024, 1, 15)

    def test_relative_dates(self):
        today = date.today()
        assert parse_date("today") == today
        assert parse_date("Yesterday") == today - timedelta(days=1)
        assert parse_date("this month") == today.replace(day=1)
        assert parse_date("this year") == date(today.year, 1, 1)
        assert parse_date("last year") == date(today.year - 1, 1, 1)

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_date("not a date")


class TestAmounts:
    """Tests for amount parsing."""

    @pytest.mark.parametrize(
        "value, expected",
        [("50.00", "50.00"), ("-120.5", "-120.5"), ("+3", "3"), ("0", "0")],
    )
    def test_parse_statement_amount(self, value, expected):
        assert parse_statement_amount(value) == Decimal(expected)

    @pytest.mark.parametrize("value", ["abc", "1,000.00", "12.", "--1", ""])
    def test_parse_statement_amount_rejects(self, value):
        with pytest.raises(ValueError):
            parse_statement_amount(value)

    @pytest.mark.parametrize(
        "value, expected",
        [("12.5", "12.5"), ("12,50", "12.50"), ("€ 12.50", "12.50"), ("1,234.56", "1234.56")],
    )
    def test_parse_amount(self, value, expected):
        assert parse_amount(value) == Decimal(expected)

    @pytest.mark.parametrize("value", ["", "   ", "twelve", "NaN", "Infinity"])
    def test_parse_amount_rejects(self, value):
        with pytest.raises(ValueError):
            parse_amount(value)

    def test_format_amount_key(self):
        assert format_amount_key(Decimal("50")) == "50.00"
        assert format_amount_key(Decimal("-45.5")) == "-45.50"
        assert format_amount_key(Decimal("100.00")) == "100.00"

    @pytest.mark.parametrize(
        "value, expected",
        [("-2.675", "-2.68"), ("100.005", "100.00"), ("0.125", "0.12"), ("7", "7.00")],
    )
    def test_parse_statement_amount_rounds_to_cents(self, value, expected):
        result = parse_statement_amount(value)

        assert result == Decimal(expected)
        assert result.as_tuple().exponent == -2

    def test_parse_statement_amount_out_of_range(self):
        with pytest.raises(ValueError):
            parse_statement_amount("9" * 40)
