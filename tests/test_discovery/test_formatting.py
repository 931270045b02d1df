"""Tests for insight number formatting."""

from commerce_insights.discovery.formatting import (
    format_abs_pct,
    format_count,
    format_currency,
    format_millions,
    format_money,
    format_pct,
    format_percent_value,
    format_thousands,
)


class TestPercentages:
    def test_pct_keeps_sign(self):
        assert format_pct(-0.05) == "-5.0%"

    def test_pct_decimals(self):
        assert format_pct(0.0625, 2) == "6.25%"
        assert format_pct(0.52, 0) == "52%"

    def test_abs_pct(self):
        assert format_abs_pct(-0.05) == "5.0%"

    def test_percent_value(self):
        assert format_percent_value(245.3) == "245.3%"
        assert format_percent_value(16.7) == "16.7%"


class TestCurrency:
    def test_money(self):
        assert format_money(89.5) == "$89.50"

    def test_currency_grouping_truncates(self):
        assert format_currency(1234567.89) == "$1,234,567"

    def test_currency_negative(self):
        assert format_currency(-2500) == "$-2,500"

    def test_count(self):
        assert format_count(12500) == "12,500"

    def test_millions(self):
        assert format_millions(1_530_000) == "$1.5M"
        assert format_millions(369_000, 2) == "$0.37M"

    def test_thousands(self):
        assert format_thousands(640_000) == "$640K"
