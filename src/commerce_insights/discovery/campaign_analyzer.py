"""Marketing campaign analysis — campaign-type ROI, best/worst campaigns, costly acquisition."""

from __future__ import annotations

from dataclasses import dataclass

from commerce_insights.discovery.formatting import format_currency, format_money, format_percent_value
from commerce_insights.discovery.models import CRITICAL, OPPORTUNITY, PERFORMANCE, DataPoint, InsightDraft
from commerce_insights.discovery.prioritizer import group_by, rank_desc
from commerce_insights.ingestion.record_normalizer import MarketingCampaign

HIGH_CAC = 90


@dataclass
class TypePerformance:
    """Aggregate results for one campaign type."""
    type: str
    avg_roi: float
    total_spend: float
    total_revenue: float
    campaigns: int


def summarize_types(campaigns: list[MarketingCampaign]) -> list[TypePerformance]:
    """Per-type ROI summary, best average ROI first."""
    summary = []
    for ctype, members in group_by(campaigns, "type").items():
        summary.append(TypePerformance(
            type=ctype,
            avg_roi=sum(c.roi_percent for c in members) / len(members),
            total_spend=sum(c.spend for c in members),
            total_revenue=sum(c.revenue for c in members),
            campaigns=len(members),
        ))
    return rank_desc(summary, key=lambda t: t.avg_roi)


def analyze_campaigns(campaigns: list[MarketingCampaign]) -> list[InsightDraft]:
    """Analyze marketing campaigns. Record order only breaks ties."""
    if not campaigns:
        return []

    results: list[InsightDraft] = []

    types = summarize_types(campaigns)
    by_roi = rank_desc(campaigns, key=lambda c: c.roi_percent)
    best, worst = by_roi[0], by_roi[-1]
    high_cac = rank_desc((c for c in campaigns if c.cac > HIGH_CAC), key=lambda c: c.cac)

    # 1. Most effective campaign type
    if types:
        top = types[0]
        roi = format_percent_value(top.avg_roi)
        results.append(InsightDraft(
            category=OPPORTUNITY,
            title=f"{top.type} campaigns deliver highest ROI ({roi})",
            description=(
                f"{top.type} campaigns consistently outperform other types with an average ROI of {roi}."
            ),
            impact=8,
            recommendation=(
                f"Increase allocation to {top.type} campaigns in your marketing budget. Analyze the "
                f"success factors of these campaigns and apply them to other marketing initiatives."
            ),
            data_points=[
                DataPoint("Campaign Type", top.type),
                DataPoint("Avg ROI", roi),
                DataPoint("Total Revenue", format_currency(top.total_revenue)),
                DataPoint("Total Spend", format_currency(top.total_spend)),
            ],
        ))

    # 2. Best individual campaign
    roi = format_percent_value(best.roi_percent)
    results.append(InsightDraft(
        category=PERFORMANCE,
        title=f"{best.campaign} is your highest-ROI campaign ({roi})",
        description=(
            f"The {best.campaign} campaign achieved an exceptional ROI of {roi}, generating "
            f"{format_currency(best.revenue)} in revenue from {format_currency(best.spend)} in spend."
        ),
        impact=9,
        recommendation=(
            "Scale this campaign if possible, and apply its successful elements to future campaigns. "
            "Analyze what made this campaign so effective (messaging, channel, timing, offer, etc.)."
        ),
        data_points=[
            DataPoint("Campaign", best.campaign),
            DataPoint("Type", best.type),
            DataPoint("ROI", roi),
            DataPoint("Revenue", format_currency(best.revenue)),
            DataPoint("New Customers", best.new_customers),
        ],
    ))

    # 3. Worst individual campaign
    roi = format_percent_value(worst.roi_percent)
    results.append(InsightDraft(
        category=CRITICAL,
        title=f"{worst.campaign} underperforming with {roi} ROI",
        description=(
            f"The {worst.campaign} campaign delivered the lowest ROI at {roi}, well below your "
            f"portfolio average."
        ),
        impact=7,
        recommendation=(
            "Consider restructuring or discontinuing this campaign. Analyze what factors contributed "
            "to its underperformance and adjust future campaign planning accordingly."
        ),
        data_points=[
            DataPoint("Campaign", worst.campaign),
            DataPoint("Type", worst.type),
            DataPoint("ROI", roi),
            DataPoint("Spend", format_currency(worst.spend)),
            DataPoint("CAC", format_money(worst.cac)),
        ],
    ))

    # 4. Costly acquisition
    if high_cac:
        expensive = high_cac[0]
        cac = format_money(expensive.cac)
        results.append(InsightDraft(
            category=CRITICAL,
            title=f"{expensive.campaign} has concerning customer acquisition cost ({cac})",
            description=(
                f"The {expensive.campaign} campaign has an exceptionally high customer acquisition "
                f"cost of {cac}, significantly increasing your marketing expenses."
            ),
            impact=8,
            recommendation=(
                "Review the targeting, messaging, and conversion funnel for this campaign to identify "
                "inefficiencies. Consider A/B testing alternative approaches or reallocating budget to "
                "more efficient channels."
            ),
            data_points=[
                DataPoint("Campaign", expensive.campaign),
                DataPoint("Type", expensive.type),
                DataPoint("CAC", cac),
                DataPoint("ROI", format_percent_value(expensive.roi_percent)),
                DataPoint("New Customers", expensive.new_customers),
            ],
        ))

    return results
