"""Report formatter — renders a prioritized insight feed as a markdown report.

Pure functions; the engine output is passed in, nothing is recomputed.
Sections follow feed priority: top insights first, then one section per
non-empty category bucket, then the consolidated action list.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone

from commerce_insights.discovery.models import INSIGHT_CATEGORIES, Insight

_CATEGORY_HEADINGS: dict[str, str] = {
    "critical": "Critical Issues",
    "opportunity": "Opportunities",
    "trend": "Trends",
    "performance": "Performance",
    "anomaly": "Anomalies",
}


@dataclass
class ReportSection:
    """A single section within a formatted report."""

    title: str
    content: str  # markdown content
    priority: int  # 1=highest, used for ordering
    section_type: str  # "summary", "category", "recommendation"


@dataclass
class FormattedReport:
    """A complete formatted markdown report."""

    title: str
    sections: list[ReportSection] = field(default_factory=list)
    generated_at: str = ""  # ISO timestamp
    markdown: str = ""  # full rendered markdown
    word_count: int = 0


# ---------------------------------------------------------------------------
# Word counting
# ---------------------------------------------------------------------------


def _count_words(text: str) -> int:
    """Count words in text, excluding markdown syntax characters.

    Strips markdown formatting (# * _ | - ` > [ ] ( )) before counting.
    """
    cleaned = re.sub(r"[#*_|`>\[\]()~\-]", " ", text)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    if not cleaned:
        return 0
    return len(cleaned.split())


def _impact_badge(impact: int) -> str:
    """Impact 9 -> '[9/10 HIGH]'."""
    if impact >= 8:
        level = "HIGH"
    elif impact >= 5:
        level = "MEDIUM"
    else:
        level = "LOW"
    return f"[{impact}/10 {level}]"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def format_insight_card(insight: Insight) -> str:
    """Format a single insight as a markdown block.

    Example output:
        **20.0% revenue increase in Feb** [9/10 HIGH]
        There was a significant increase ...
        - Month: Feb
        > Recommendation: Analyze what factors ...
    """
    lines = [f"**{insight.title}** {_impact_badge(insight.impact)}", insight.description]
    for dp in insight.data_points:
        lines.append(f"- {dp.label}: {dp.value}")
    lines.append(f"> Recommendation: {insight.recommendation}")
    return "\n".join(lines)


def format_feed_report(
    insights: list[Insight],
    title: str = "Business Insights",
    top_n: int = 5,
) -> FormattedReport:
    """Assemble a markdown report from an already prioritized insight list."""
    sections: list[ReportSection] = []
    timestamp = datetime.now(timezone.utc).isoformat()

    if not insights:
        sections.append(ReportSection(
            title="Summary",
            content="### Summary\n\nNo insights were generated from the supplied data.",
            priority=1,
            section_type="summary",
        ))
    else:
        # 1. Top insights
        top = insights[:max(top_n, 0)]
        if top:
            content_lines = ["### Top Insights"]
            for rank, ins in enumerate(top, start=1):
                content_lines.append(f"{rank}. {ins.title} {_impact_badge(ins.impact)}")
            sections.append(ReportSection(
                title="Top Insights",
                content="\n".join(content_lines),
                priority=1,
                section_type="summary",
            ))

        # 2. One section per category, fixed category order
        for offset, category in enumerate(INSIGHT_CATEGORIES):
            bucket = [i for i in insights if i.category == category]
            if not bucket:
                continue
            heading = _CATEGORY_HEADINGS[category]
            cards = "\n\n".join(format_insight_card(i) for i in bucket)
            sections.append(ReportSection(
                title=heading,
                content=f"### {heading}\n\n{cards}",
                priority=2 + offset,
                section_type="category",
            ))

        # 3. Action list
        content_lines = ["### Recommended Actions"]
        for ins in insights:
            content_lines.append(f"- {ins.recommendation}")
        sections.append(ReportSection(
            title="Recommended Actions",
            content="\n".join(content_lines),
            priority=len(INSIGHT_CATEGORIES) + 2,
            section_type="recommendation",
        ))

    sections.sort(key=lambda s: s.priority)

    md_parts = [f"# {title}", f"*Generated: {timestamp}*", ""]
    for section in sections:
        md_parts.append(section.content)
        md_parts.append("")
    markdown = "\n".join(md_parts)

    return FormattedReport(
        title=title,
        sections=sections,
        generated_at=timestamp,
        markdown=markdown,
        word_count=_count_words(markdown),
    )
