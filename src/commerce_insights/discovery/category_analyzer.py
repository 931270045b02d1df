"""Product category analysis — decline, margin leaders, growth, revenue/margin mismatch."""

from __future__ import annotations

from commerce_insights.discovery.formatting import (
    format_abs_pct,
    format_currency,
    format_millions,
    format_pct,
    format_thousands,
)
from commerce_insights.discovery.models import CRITICAL, OPPORTUNITY, PERFORMANCE, DataPoint, InsightDraft
from commerce_insights.discovery.prioritizer import rank_desc
from commerce_insights.ingestion.record_normalizer import ProductCategory

HIGH_GROWTH = 0.05
HIGH_REVENUE = 1_000_000
LOW_MARGIN = 0.3
HIGH_MARGIN = 0.35
LOW_REVENUE = 700_000


def analyze_categories(categories: list[ProductCategory]) -> list[InsightDraft]:
    """Analyze product categories. Record order does not matter."""
    if not categories:
        return []

    results: list[InsightDraft] = []

    declining = [c for c in categories if c.yoy_growth < 0]
    high_margin = rank_desc(categories, key=lambda c: c.margin)[:2]
    high_growth = rank_desc(
        (c for c in categories if c.yoy_growth > HIGH_GROWTH),
        key=lambda c: c.yoy_growth,
    )
    volume_low_margin = [c for c in categories if c.revenue > HIGH_REVENUE and c.margin < LOW_MARGIN]
    margin_low_volume = [c for c in categories if c.revenue < LOW_REVENUE and c.margin > HIGH_MARGIN]

    # 1. Declining categories, one each
    for cat in declining:
        results.append(InsightDraft(
            category=CRITICAL,
            title=f"{cat.category} category declining ({format_pct(cat.yoy_growth)})",
            description=(
                f"The {cat.category} category is showing a year-over-year decline of "
                f"{format_abs_pct(cat.yoy_growth)}."
            ),
            impact=8,
            recommendation=(
                f"Conduct a detailed competitive analysis of the {cat.category} category to identify "
                f"market trends and competitive pressures. Consider product refreshes, pricing "
                f"strategy adjustments, or targeted marketing campaigns."
            ),
            data_points=[
                DataPoint("Category", cat.category),
                DataPoint("YoY Growth", format_pct(cat.yoy_growth)),
                DataPoint("Revenue", format_currency(cat.revenue)),
            ],
        ))

    # 2. Margin leader
    if high_margin:
        top = high_margin[0]
        margin = format_pct(top.margin, 0)
        results.append(InsightDraft(
            category=OPPORTUNITY,
            title=f"{top.category} has highest profit margin ({margin})",
            description=(
                f"The {top.category} category has your highest profit margin at {margin}, "
                f"representing a significant opportunity for profit growth."
            ),
            impact=7,
            recommendation=(
                f"Increase marketing investment in the {top.category} category and consider "
                f"expanding the product range. Analyze what makes this category so profitable "
                f"and apply those lessons to other categories."
            ),
            data_points=[
                DataPoint("Category", top.category),
                DataPoint("Margin", margin),
                DataPoint("Revenue", format_currency(top.revenue)),
                DataPoint("Profit", format_currency(top.profit)),
            ],
        ))

    # 3. Fastest growing
    if high_growth:
        fastest = high_growth[0]
        growth = format_pct(fastest.yoy_growth)
        results.append(InsightDraft(
            category=OPPORTUNITY,
            title=f"{fastest.category} is fastest growing ({growth})",
            description=(
                f"The {fastest.category} category is showing strong growth at {growth} year-over-year."
            ),
            impact=8,
            recommendation=(
                f"Capitalize on this growth by increasing inventory levels, expanding product "
                f"selection, and allocating additional marketing resources to the "
                f"{fastest.category} category."
            ),
            data_points=[
                DataPoint("Category", fastest.category),
                DataPoint("YoY Growth", growth),
                DataPoint("Revenue", format_currency(fastest.revenue)),
            ],
        ))

    # 4. High revenue, thin margin
    if volume_low_margin:
        cat = volume_low_margin[0]
        results.append(InsightDraft(
            category=PERFORMANCE,
            title=f"{cat.category} has high revenue but low margins",
            description=(
                f"{cat.category} generates {format_millions(cat.revenue)} in revenue but operates "
                f"at only {format_pct(cat.margin)} margin."
            ),
            impact=6,
            recommendation=(
                f"Evaluate pricing strategies, supply chain costs, and potential premium products "
                f"for the {cat.category} category to improve margins while maintaining sales volume."
            ),
            data_points=[
                DataPoint("Category", cat.category),
                DataPoint("Revenue", format_currency(cat.revenue)),
                DataPoint("Margin", format_pct(cat.margin)),
            ],
        ))

    # 5. Strong margin, small volume
    if margin_low_volume:
        cat = margin_low_volume[0]
        results.append(InsightDraft(
            category=OPPORTUNITY,
            title=f"{cat.category} has high margin but low sales volume",
            description=(
                f"{cat.category} operates at a strong {format_pct(cat.margin)} margin but only "
                f"generates {format_thousands(cat.revenue)} in revenue."
            ),
            impact=7,
            recommendation=(
                f"Consider expanding marketing efforts for {cat.category} to increase sales volume "
                f"while maintaining the strong profit margins, potentially through targeted "
                f"advertising and expanding the product range."
            ),
            data_points=[
                DataPoint("Category", cat.category),
                DataPoint("Margin", format_pct(cat.margin)),
                DataPoint("Revenue", format_currency(cat.revenue)),
            ],
        ))

    return results
