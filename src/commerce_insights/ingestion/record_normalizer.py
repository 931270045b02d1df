"""Record normalization — raw dashboard rows into typed, validated records.

Every analyzer works on already-typed records. Parsing happens here once, so a
bad numeric field is a single, detectable failure (MalformedFieldError) rather
than a NaN leaking into a ranking.

Numeric handling:
    - ints/floats pass through (bools are rejected)
    - strings are stripped; thousands separators and a leading "$" are removed
    - ratio fields accept a trailing "%" (e.g. "15%" -> 0.15)
    - integer fields must hold an integral value
    - missing, empty, non-numeric and non-finite values are malformed
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Sequence

logger = logging.getLogger(__name__)


class MalformedFieldError(ValueError):
    """A required field is missing or cannot be parsed."""

    def __init__(self, dataset: str, row_index: int, field: str, value: Any) -> None:
        self.dataset = dataset
        self.row_index = row_index
        self.field = field
        self.value = value
        super().__init__(
            f"{dataset}[{row_index}].{field}: cannot parse {value!r}"
        )


# ---------------------------------------------------------------------------
# Typed records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MonthlySales:
    month: str
    revenue: float
    orders: int
    aov: float


@dataclass(frozen=True)
class ProductCategory:
    category: str
    revenue: float
    margin: float  # ratio 0-1
    yoy_growth: float  # signed ratio
    profit: float


@dataclass(frozen=True)
class TrafficSource:
    source: str
    visits: int
    conversion_rate: float
    bounce_rate: float
    aov: float
    revenue: float


@dataclass(frozen=True)
class CustomerDemographic:
    age_group: str
    gender: str
    customer_count: int
    avg_annual_spend: float
    total_spend: float


@dataclass(frozen=True)
class MarketingCampaign:
    campaign: str
    type: str
    spend: float
    revenue: float
    roi_percent: float  # already a percentage (e.g. 245.3)
    cac: float
    new_customers: int


# ---------------------------------------------------------------------------
# Field parsers
# ---------------------------------------------------------------------------


class _Unparsable(Exception):
    pass


def _clean_numeric_text(val: Any) -> str:
    if val is None or isinstance(val, bool):
        raise _Unparsable
    text = str(val).strip().replace(",", "")
    if text.startswith("$"):
        text = text[1:]
    elif text.startswith("-$"):
        text = "-" + text[2:]
    if not text:
        raise _Unparsable
    return text


def _finite(num: float) -> float:
    if not math.isfinite(num):
        raise _Unparsable
    return num


def parse_decimal(val: Any) -> float:
    """Parse a signed decimal. Raises _Unparsable on failure."""
    try:
        if isinstance(val, (int, float)) and not isinstance(val, bool):
            return _finite(float(val))
        return _finite(float(_clean_numeric_text(val)))
    except (ValueError, OverflowError):
        raise _Unparsable from None


def parse_ratio(val: Any) -> float:
    """Parse a ratio; "15%" and "15 %" become 0.15."""
    if isinstance(val, str) and val.strip().endswith("%"):
        return parse_decimal(val.strip()[:-1]) / 100
    return parse_decimal(val)


def parse_integer(val: Any) -> int:
    """Parse an integral count. "12.0" is accepted, "12.5" is not."""
    num = parse_decimal(val)
    if not num.is_integer():
        raise _Unparsable
    return int(num)


def parse_label(val: Any) -> str:
    if val is None:
        raise _Unparsable
    if isinstance(val, float) and math.isnan(val):
        raise _Unparsable
    text = str(val).strip()
    if not text:
        raise _Unparsable
    return text


# ---------------------------------------------------------------------------
# Dataset schemas
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DatasetSchema:
    """Maps raw column names to record attributes and their parsers."""
    name: str
    record_type: type
    fields: tuple[tuple[str, str, Callable[[Any], Any]], ...]  # (column, attr, parser)


SCHEMAS: dict[str, DatasetSchema] = {
    "monthlySales": DatasetSchema(
        name="monthlySales",
        record_type=MonthlySales,
        fields=(
            ("Month", "month", parse_label),
            ("Revenue", "revenue", parse_decimal),
            ("Orders", "orders", parse_integer),
            ("AOV", "aov", parse_decimal),
        ),
    ),
    "productCategories": DatasetSchema(
        name="productCategories",
        record_type=ProductCategory,
        fields=(
            ("Category", "category", parse_label),
            ("Revenue", "revenue", parse_decimal),
            ("Margin", "margin", parse_ratio),
            ("YoYGrowth", "yoy_growth", parse_ratio),
            ("Profit", "profit", parse_decimal),
        ),
    ),
    "trafficSources": DatasetSchema(
        name="trafficSources",
        record_type=TrafficSource,
        fields=(
            ("Source", "source", parse_label),
            ("Visits", "visits", parse_integer),
            ("ConversionRate", "conversion_rate", parse_ratio),
            ("BounceRate", "bounce_rate", parse_ratio),
            ("AOV", "aov", parse_decimal),
            ("Revenue", "revenue", parse_decimal),
        ),
    ),
    "customerDemographics": DatasetSchema(
        name="customerDemographics",
        record_type=CustomerDemographic,
        fields=(
            ("AgeGroup", "age_group", parse_label),
            ("Gender", "gender", parse_label),
            ("CustomerCount", "customer_count", parse_integer),
            ("AvgAnnualSpend", "avg_annual_spend", parse_decimal),
            ("TotalSpend", "total_spend", parse_decimal),
        ),
    ),
    "marketingCampaigns": DatasetSchema(
        name="marketingCampaigns",
        record_type=MarketingCampaign,
        fields=(
            ("Campaign", "campaign", parse_label),
            ("Type", "type", parse_label),
            ("Spend", "spend", parse_decimal),
            ("Revenue", "revenue", parse_decimal),
            ("ROI_Percent", "roi_percent", parse_decimal),
            ("CAC", "cac", parse_decimal),
            ("NewCustomers", "new_customers", parse_integer),
        ),
    ),
}

DATASET_KEYS: tuple[str, ...] = tuple(SCHEMAS)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def normalize_records(dataset: str, rows: Sequence[Mapping[str, Any]] | None) -> list:
    """Convert raw rows of one dataset into typed records, preserving order.

    Raises:
        KeyError: unknown dataset name.
        MalformedFieldError: first field that is missing or unparsable.
    """
    schema = SCHEMAS[dataset]
    if not rows:
        return []

    records = []
    for idx, row in enumerate(rows):
        values: dict[str, Any] = {}
        for column, attr, parser in schema.fields:
            raw = row.get(column)
            try:
                values[attr] = parser(raw)
            except _Unparsable:
                raise MalformedFieldError(dataset, idx, column, raw) from None
        records.append(schema.record_type(**values))

    logger.debug("Normalized %d %s records", len(records), dataset)
    return records


def normalize_bundle(bundle: Mapping[str, Any] | None) -> dict[str, list]:
    """Normalize every known dataset in *bundle*; absent keys map to []."""
    bundle = bundle or {}
    return {key: normalize_records(key, bundle.get(key)) for key in DATASET_KEYS}
