"""Monthly revenue analysis — swings, decline streaks, peaks and seasonality."""

from __future__ import annotations

import logging
import math

from commerce_insights.discovery.formatting import format_abs_pct, format_money, format_pct
from commerce_insights.discovery.models import CRITICAL, OPPORTUNITY, TREND, DataPoint, InsightDraft
from commerce_insights.discovery.prioritizer import rank_desc
from commerce_insights.discovery.seasonality_detector import (
    detect_peaks,
    growth_rates,
    longest_decline_streak,
    month_token,
)
from commerce_insights.ingestion.record_normalizer import MonthlySales

logger = logging.getLogger(__name__)

SIGNIFICANT_CHANGE = 0.15
MIN_DECLINE_STREAK = 2


def analyze_revenue(sales: list[MonthlySales]) -> list[InsightDraft]:
    """Analyze chronologically ordered monthly sales."""
    if not sales:
        return []

    results: list[InsightDraft] = []
    rates = growth_rates([m.revenue for m in sales])

    # 1. Significant month-over-month swings
    for month, rate in zip(sales[1:], rates):
        if rate is None:
            logger.debug("Skipping growth for %s: previous month revenue is zero", month.month)
            continue
        if abs(rate) > SIGNIFICANT_CHANGE:
            results.append(_revenue_change(month.month, rate))

    # 2. Consecutive declines
    streak = longest_decline_streak(rates)
    if streak >= MIN_DECLINE_STREAK:
        results.append(InsightDraft(
            category=CRITICAL,
            title=f"{streak} consecutive months of revenue decline",
            description=(
                f"The business has experienced {streak} consecutive months of declining revenue, "
                f"which indicates a concerning trend."
            ),
            impact=8,
            recommendation=(
                "Conduct a comprehensive analysis to identify the root causes of this decline. "
                "Consider reviewing recent market changes, competitor actions, and internal "
                "operational factors."
            ),
            data_points=[DataPoint("Consecutive Declines", streak)],
        ))

    # 3. Peak AOV and order volume
    top_aov = rank_desc(sales, key=lambda m: m.aov)[0]
    results.append(InsightDraft(
        category=OPPORTUNITY,
        title=f"Highest AOV in {top_aov.month}",
        description=(
            f"{top_aov.month} had the highest Average Order Value at {format_money(top_aov.aov)}, "
            f"suggesting effective upselling or premium product popularity."
        ),
        impact=6,
        recommendation=(
            f"Examine the product mix, promotions, and customer segments active during "
            f"{top_aov.month} to understand what drove higher transaction values. "
            f"Apply these insights to other periods."
        ),
        data_points=[DataPoint("Month", top_aov.month), DataPoint("AOV", format_money(top_aov.aov))],
    ))

    top_orders = rank_desc(sales, key=lambda m: m.orders)[0]
    results.append(InsightDraft(
        category=OPPORTUNITY,
        title=f"Peak order volume in {top_orders.month}",
        description=(
            f"{top_orders.month} had the highest number of orders ({top_orders.orders}), "
            f"indicating strong customer acquisition or retention."
        ),
        impact=5,
        recommendation=(
            f"Review marketing campaigns, promotions, and customer engagement strategies used "
            f"during {top_orders.month} to identify successful approaches."
        ),
        data_points=[DataPoint("Month", top_orders.month), DataPoint("Orders", top_orders.orders)],
    ))

    # 4. Seasonality
    season = detect_peaks([m.revenue for m in sales])
    if season.seasonal:
        peak_months = ", ".join(month_token(sales[i].month) for i in season.peak_indices)
        results.append(InsightDraft(
            category=TREND,
            title="Seasonal revenue patterns detected",
            description=(
                f"Analysis indicates a seasonal pattern in revenue, with peaks occurring in {peak_months}."
            ),
            impact=7,
            recommendation=(
                "Develop season-specific strategies to capitalize on peak periods and mitigate the "
                "impact of slower months. Consider inventory planning, marketing budget allocation, "
                "and staffing based on these patterns."
            ),
            data_points=[DataPoint("Peak Months", peak_months)],
        ))

    return results


def _revenue_change(month: str, rate: float) -> InsightDraft:
    """Build the insight for one significant month-over-month change."""
    if rate > 0:
        direction = "increase"
        category = OPPORTUNITY
        impact = min(7 + math.floor(rate * 10), 10)
        recommendation = (
            "Analyze what factors contributed to this success and consider replicating these strategies."
        )
    else:
        direction = "decrease"
        category = CRITICAL
        impact = min(5 + math.floor(abs(rate) * 10), 10)
        recommendation = (
            "Investigate potential causes for this decline and develop strategies to address "
            "any underlying issues."
        )

    magnitude = format_abs_pct(rate)
    return InsightDraft(
        category=category,
        title=f"{magnitude} revenue {direction} in {month}",
        description=(
            f"There was a significant {direction} of {magnitude} in monthly revenue during {month}."
        ),
        impact=impact,
        recommendation=recommendation,
        data_points=[DataPoint("Month", month), DataPoint("Change", format_pct(rate))],
    )
