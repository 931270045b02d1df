"""Tests for the record normalizer."""

import pytest

from commerce_insights.ingestion.record_normalizer import (
    DATASET_KEYS,
    CustomerDemographic,
    MalformedFieldError,
    MonthlySales,
    TrafficSource,
    _Unparsable,
    normalize_bundle,
    normalize_records,
    parse_decimal,
    parse_integer,
    parse_label,
    parse_ratio,
)


# ---------------------------------------------------------------------------
# Field parsers
# ---------------------------------------------------------------------------


class TestParseDecimal:
    def test_int(self):
        assert parse_decimal(42) == 42.0

    def test_float(self):
        assert parse_decimal(3.14) == 3.14

    def test_string_number(self):
        assert parse_decimal("100.5") == 100.5

    def test_negative_string(self):
        assert parse_decimal("-0.05") == -0.05

    def test_thousands_separator(self):
        assert parse_decimal("1,234,567.5") == 1234567.5

    def test_dollar_prefix(self):
        assert parse_decimal("$89.50") == 89.5

    def test_negative_dollar(self):
        assert parse_decimal("-$12") == -12.0

    def test_whitespace(self):
        assert parse_decimal("  7 ") == 7.0

    @pytest.mark.parametrize("bad", [None, "", "   ", "abc", "nan", "inf", True, float("nan")])
    def test_rejects(self, bad):
        with pytest.raises(_Unparsable):
            parse_decimal(bad)

    def test_rejects_int_beyond_float_range(self):
        with pytest.raises(_Unparsable):
            parse_decimal(10**400)


class TestParseRatio:
    def test_plain_ratio(self):
        assert parse_ratio("0.15") == 0.15

    def test_percent_string(self):
        assert parse_ratio("15%") == pytest.approx(0.15)

    def test_negative_percent(self):
        assert parse_ratio("-5%") == pytest.approx(-0.05)

    def test_numeric_passthrough(self):
        assert parse_ratio(0.42) == 0.42


class TestParseInteger:
    def test_int_string(self):
        assert parse_integer("1200") == 1200

    def test_integral_float_string(self):
        assert parse_integer("12.0") == 12

    def test_grouped(self):
        assert parse_integer("12,500") == 12500

    def test_fraction_rejected(self):
        with pytest.raises(_Unparsable):
            parse_integer("12.5")


class TestParseLabel:
    def test_strips(self):
        assert parse_label("  Jan 2025 ") == "Jan 2025"

    def test_number_label(self):
        assert parse_label(2024) == "2024"

    @pytest.mark.parametrize("bad", [None, "", "  ", float("nan")])
    def test_rejects(self, bad):
        with pytest.raises(_Unparsable):
            parse_label(bad)


# ---------------------------------------------------------------------------
# normalize_records
# ---------------------------------------------------------------------------


class TestNormalizeRecords:
    def test_monthly_sales(self):
        rows = [
            {"Month": "Jan 2025", "Revenue": "100000", "Orders": "1000", "AOV": "100.00"},
            {"Month": "Feb 2025", "Revenue": 120000, "Orders": 1100, "AOV": 109.09},
        ]
        records = normalize_records("monthlySales", rows)
        assert records == [
            MonthlySales(month="Jan 2025", revenue=100000.0, orders=1000, aov=100.0),
            MonthlySales(month="Feb 2025", revenue=120000.0, orders=1100, aov=109.09),
        ]

    def test_preserves_order(self):
        rows = [{"Month": m, "Revenue": "1", "Orders": "1", "AOV": "1"} for m in ("Mar", "Jan", "Feb")]
        assert [r.month for r in normalize_records("monthlySales", rows)] == ["Mar", "Jan", "Feb"]

    def test_traffic_ratio_fields(self):
        rows = [{
            "Source": "Email", "Visits": "5000", "ConversionRate": "4.5%",
            "BounceRate": "0.32", "AOV": "92.10", "Revenue": "20722.5",
        }]
        rec = normalize_records("trafficSources", rows)[0]
        assert isinstance(rec, TrafficSource)
        assert rec.conversion_rate == pytest.approx(0.045)
        assert rec.bounce_rate == 0.32
        assert rec.visits == 5000

    def test_extra_columns_ignored(self):
        rows = [{
            "AgeGroup": "25-34", "Gender": "Female", "CustomerCount": "900",
            "AvgAnnualSpend": "410.5", "TotalSpend": "369450", "Region": "West",
        }]
        rec = normalize_records("customerDemographics", rows)[0]
        assert rec == CustomerDemographic("25-34", "Female", 900, 410.5, 369450.0)

    def test_empty_and_none(self):
        assert normalize_records("monthlySales", []) == []
        assert normalize_records("monthlySales", None) == []

    def test_unknown_dataset(self):
        with pytest.raises(KeyError):
            normalize_records("inventory", [{"a": 1}])

    def test_malformed_field_reports_location(self):
        rows = [
            {"Month": "Jan", "Revenue": "100", "Orders": "10", "AOV": "10"},
            {"Month": "Feb", "Revenue": "n/a", "Orders": "12", "AOV": "10"},
        ]
        with pytest.raises(MalformedFieldError) as exc_info:
            normalize_records("monthlySales", rows)
        err = exc_info.value
        assert err.dataset == "monthlySales"
        assert err.row_index == 1
        assert err.field == "Revenue"
        assert err.value == "n/a"
        assert isinstance(err, ValueError)

    def test_oversized_integer_is_malformed(self):
        rows = [{
            "Source": "Email", "Visits": 10**400, "ConversionRate": "0.05",
            "BounceRate": "0.2", "AOV": "50", "Revenue": "900",
        }]
        with pytest.raises(MalformedFieldError) as exc_info:
            normalize_records("trafficSources", rows)
        assert exc_info.value.field == "Visits"

    def test_missing_field_is_malformed(self):
        rows = [{"Month": "Jan", "Revenue": "100", "AOV": "10"}]
        with pytest.raises(MalformedFieldError) as exc_info:
            normalize_records("monthlySales", rows)
        assert exc_info.value.field == "Orders"


class TestNormalizeBundle:
    def test_all_keys_present(self):
        result = normalize_bundle({})
        assert set(result) == set(DATASET_KEYS)
        assert all(v == [] for v in result.values())

    def test_none_bundle(self):
        assert normalize_bundle(None)["monthlySales"] == []

    def test_partial_bundle(self):
        result = normalize_bundle({
            "monthlySales": [{"Month": "Jan", "Revenue": "1", "Orders": "1", "AOV": "1"}],
        })
        assert len(result["monthlySales"]) == 1
        assert result["marketingCampaigns"] == []
