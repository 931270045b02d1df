"""Traffic source analysis — conversion, revenue per visit, bounce, untapped AOV."""

from __future__ import annotations

import logging

from commerce_insights.discovery.formatting import format_count, format_money, format_pct
from commerce_insights.discovery.models import CRITICAL, OPPORTUNITY, PERFORMANCE, DataPoint, InsightDraft
from commerce_insights.discovery.prioritizer import rank_desc
from commerce_insights.ingestion.record_normalizer import TrafficSource

logger = logging.getLogger(__name__)

HIGH_BOUNCE = 0.5
LOW_CONVERSION = 0.03
HIGH_AOV = 85


def revenue_per_visit(source: TrafficSource) -> float | None:
    """Revenue / visits; None for a source with no visits."""
    if source.visits == 0:
        return None
    return source.revenue / source.visits


def analyze_traffic(sources: list[TrafficSource]) -> list[InsightDraft]:
    """Analyze traffic sources. Record order does not matter."""
    if not sources:
        return []

    results: list[InsightDraft] = []

    by_conversion = rank_desc(sources, key=lambda s: s.conversion_rate)
    by_efficiency = rank_desc(sources, key=revenue_per_visit)
    high_bounce = rank_desc(
        (s for s in sources if s.bounce_rate > HIGH_BOUNCE),
        key=lambda s: s.bounce_rate,
    )
    high_potential = [s for s in sources if s.conversion_rate < LOW_CONVERSION and s.aov > HIGH_AOV]

    excluded = len(sources) - len(by_efficiency)
    if excluded:
        logger.debug("%d traffic source(s) without visits excluded from efficiency ranking", excluded)

    # 1. Best converting channel
    best = by_conversion[0]
    cr = format_pct(best.conversion_rate, 2)
    results.append(InsightDraft(
        category=PERFORMANCE,
        title=f"{best.source} has highest conversion rate ({cr})",
        description=f"{best.source} traffic converts at {cr}, significantly higher than other channels.",
        impact=8,
        recommendation=(
            f"Increase investment in {best.source} marketing initiatives while analyzing what makes "
            f"this channel so effective. Apply these learnings to improve conversion rates across "
            f"other channels."
        ),
        data_points=[
            DataPoint("Source", best.source),
            DataPoint("Conversion Rate", cr),
            DataPoint("AOV", format_money(best.aov)),
        ],
    ))

    # 2. Most efficient channel (revenue per visit)
    if by_efficiency:
        top = by_efficiency[0]
        rpv = format_money(revenue_per_visit(top))
        results.append(InsightDraft(
            category=OPPORTUNITY,
            title=f"{top.source} generates highest revenue per visitor ({rpv})",
            description=(
                f"{top.source} traffic generates {rpv} in revenue per visitor, making it your most "
                f"efficient acquisition channel."
            ),
            impact=9,
            recommendation=(
                f"Scale up investment in {top.source} marketing to capitalize on its efficiency. "
                f"Analyze the customer journey from this source to identify what drives its "
                f"superior performance."
            ),
            data_points=[
                DataPoint("Source", top.source),
                DataPoint("Revenue per Visitor", rpv),
                DataPoint("Conversion Rate", format_pct(top.conversion_rate, 2)),
            ],
        ))

    # 3. Excessive bounce
    if high_bounce:
        worst = high_bounce[0]
        bounce = format_pct(worst.bounce_rate, 0)
        results.append(InsightDraft(
            category=CRITICAL,
            title=f"{worst.source} has excessive bounce rate ({bounce})",
            description=(
                f"{worst.source} traffic has a concerning bounce rate of {bounce}, indicating "
                f"potential issues with landing page relevance or user experience."
            ),
            impact=7,
            recommendation=(
                f"Review and optimize landing pages for {worst.source} traffic. Ensure message match "
                f"between ads and landing pages, improve page load speed, and enhance mobile experience."
            ),
            data_points=[
                DataPoint("Source", worst.source),
                DataPoint("Bounce Rate", bounce),
                DataPoint("Visits", format_count(worst.visits)),
            ],
        ))

    # 4. Low conversion but valuable baskets
    if high_potential:
        channel = high_potential[0]
        aov = format_money(channel.aov)
        cr = format_pct(channel.conversion_rate, 2)
        results.append(InsightDraft(
            category=OPPORTUNITY,
            title=f"{channel.source} has untapped potential with high AOV",
            description=(
                f"{channel.source} traffic has a high AOV of {aov} but a low conversion rate of {cr}."
            ),
            impact=6,
            recommendation=(
                f"Focus on conversion rate optimization for {channel.source} traffic. A small "
                f"improvement in conversion rate could yield significant revenue given the high AOV."
            ),
            data_points=[
                DataPoint("Source", channel.source),
                DataPoint("AOV", aov),
                DataPoint("Conversion Rate", cr),
            ],
        ))

    return results
