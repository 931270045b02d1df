"""Number formatting used when building insight text.

Values are stored as ratios and plain numbers; these helpers produce the
display strings ("15.0%", "$1,234,567", "$89.50") at description time.
"""

from __future__ import annotations


def format_pct(ratio: float, decimals: int = 1) -> str:
    """0.153 -> '15.3%' (sign kept)."""
    return f"{ratio * 100:.{decimals}f}%"


def format_abs_pct(ratio: float, decimals: int = 1) -> str:
    """-0.05 -> '5.0%'."""
    return f"{abs(ratio * 100):.{decimals}f}%"


def format_percent_value(value: float, decimals: int = 1) -> str:
    """For fields that already hold a percentage: 245.3 -> '245.3%'."""
    return f"{value:.{decimals}f}%"


def format_money(value: float, decimals: int = 2) -> str:
    """89.5 -> '$89.50'."""
    return f"${value:.{decimals}f}"


def format_currency(value: float) -> str:
    """Whole-dollar amount with grouping: 1234567.89 -> '$1,234,567'.

    Fractions are truncated toward zero.
    """
    return f"${int(value):,}"


def format_count(value: float) -> str:
    """12500 -> '12,500'."""
    return f"{int(value):,}"


def format_millions(value: float, decimals: int = 1) -> str:
    """1530000 -> '$1.5M'."""
    return f"${value / 1_000_000:.{decimals}f}M"


def format_thousands(value: float, decimals: int = 0) -> str:
    """640000 -> '$640K'."""
    return f"${value / 1_000:.{decimals}f}K"
