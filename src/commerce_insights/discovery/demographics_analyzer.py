"""Customer demographics analysis — gender spend gap and top segments."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from commerce_insights.discovery.formatting import format_count, format_currency, format_millions, format_money
from commerce_insights.discovery.models import OPPORTUNITY, PERFORMANCE, TREND, DataPoint, InsightDraft
from commerce_insights.discovery.prioritizer import group_by, rank_desc
from commerce_insights.ingestion.record_normalizer import CustomerDemographic

logger = logging.getLogger(__name__)

GENDER_GAP_PCT = 10.0


@dataclass
class GenderGap:
    """Spend-weighted average annual spend per gender."""
    male_avg: float
    female_avg: float
    diff_pct: float  # relative to the lower average, in percent

    @property
    def higher(self) -> str:
        return "Male" if self.male_avg > self.female_avg else "Female"

    @property
    def lower(self) -> str:
        return "Female" if self.higher == "Male" else "Male"


def compute_gender_gap(demographics: list[CustomerDemographic]) -> GenderGap | None:
    """Compare Male vs Female average spend per customer.

    Returns None unless both groups exist and every denominator is non-zero.
    """
    groups = group_by(demographics, "gender")
    male = groups.get("Male")
    female = groups.get("Female")
    if not male or not female:
        return None

    male_count = sum(d.customer_count for d in male)
    female_count = sum(d.customer_count for d in female)
    if male_count == 0 or female_count == 0:
        logger.debug("Gender gap skipped: a gender group has no customers")
        return None

    male_avg = sum(d.total_spend for d in male) / male_count
    female_avg = sum(d.total_spend for d in female) / female_count
    lower = min(male_avg, female_avg)
    if lower <= 0:
        logger.debug("Gender gap skipped: non-positive average spend")
        return None

    diff_pct = abs(male_avg - female_avg) / lower * 100
    if not math.isfinite(diff_pct):
        logger.debug("Gender gap skipped: spend ratio overflows")
        return None
    return GenderGap(male_avg=male_avg, female_avg=female_avg, diff_pct=diff_pct)


def analyze_demographics(demographics: list[CustomerDemographic]) -> list[InsightDraft]:
    """Analyze age/gender customer segments. Record order does not matter."""
    if not demographics:
        return []

    results: list[InsightDraft] = []

    # 1. Gender spending gap
    gap = compute_gender_gap(demographics)
    if gap and gap.diff_pct > GENDER_GAP_PCT:
        higher, lower = gap.higher, gap.lower
        results.append(InsightDraft(
            category=TREND,
            title=f"{higher} customers spend {gap.diff_pct:.1f}% more annually",
            description=(
                f"On average, {higher} customers spend "
                f"{format_money(max(gap.male_avg, gap.female_avg))} annually, which is "
                f"{gap.diff_pct:.1f}% more than {lower} customers."
            ),
            impact=7,
            recommendation=(
                f"Develop targeted marketing strategies for {lower} customers to increase their "
                f"average spend, while continuing to nurture the high-value {higher} segment."
            ),
            data_points=[
                DataPoint("Male Avg Spend", format_money(gap.male_avg)),
                DataPoint("Female Avg Spend", format_money(gap.female_avg)),
                DataPoint("Difference", f"{gap.diff_pct:.1f}%"),
            ],
        ))

    # 2. Highest value segment
    top = rank_desc(demographics, key=lambda d: d.avg_annual_spend)[0]
    segment = f"{top.age_group} {top.gender}"
    results.append(InsightDraft(
        category=OPPORTUNITY,
        title=f"{segment} customers are highest value",
        description=(
            f"{segment} customers spend an average of {format_money(top.avg_annual_spend)} annually, "
            f"making them your most valuable demographic segment."
        ),
        impact=8,
        recommendation=(
            f"Develop premium product offerings and loyalty programs specifically for the {segment} "
            f"segment. Increase marketing efforts to acquire more customers in this high-value "
            f"demographic."
        ),
        data_points=[
            DataPoint("Segment", segment),
            DataPoint("Avg Annual Spend", format_money(top.avg_annual_spend)),
            DataPoint("Customer Count", top.customer_count),
        ],
    ))

    # 3. Largest segment
    largest = rank_desc(demographics, key=lambda d: d.customer_count)[0]
    segment = f"{largest.age_group} {largest.gender}"
    results.append(InsightDraft(
        category=TREND,
        title=f"{segment} is your largest customer segment",
        description=(
            f"The {segment} segment represents your largest customer base with "
            f"{format_count(largest.customer_count)} customers."
        ),
        impact=6,
        recommendation=(
            f"Ensure product offerings and marketing messages are well-aligned with the preferences "
            f"of {segment} customers to maximize retention and lifetime value."
        ),
        data_points=[
            DataPoint("Segment", segment),
            DataPoint("Customer Count", format_count(largest.customer_count)),
            DataPoint("Avg Annual Spend", format_money(largest.avg_annual_spend)),
        ],
    ))

    # 4. Highest total revenue segment
    biggest = rank_desc(demographics, key=lambda d: d.total_spend)[0]
    segment = f"{biggest.age_group} {biggest.gender}"
    results.append(InsightDraft(
        category=PERFORMANCE,
        title=f"{segment} generates highest total revenue",
        description=(
            f"The {segment} segment generates {format_millions(biggest.total_spend, 2)} in annual "
            f"revenue, making them your most important customer segment by total spend."
        ),
        impact=9,
        recommendation=(
            f"Prioritize customer experience and retention initiatives for the {segment} segment. "
            f"Develop exclusive offerings and implement a VIP program to enhance loyalty."
        ),
        data_points=[
            DataPoint("Segment", segment),
            DataPoint("Total Annual Spend", format_currency(biggest.total_spend)),
            DataPoint("Customer Count", format_count(biggest.customer_count)),
        ],
    ))

    return results
