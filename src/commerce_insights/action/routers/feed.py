"""Insight feed routes.

Stateless: every request builds a fresh engine over the posted bundle.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from commerce_insights.discovery.engine import InsightsEngine
from commerce_insights.discovery.models import INSIGHT_CATEGORIES
from commerce_insights.discovery.report_formatter import format_feed_report
from config.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["insights"])


# ---------------------------------------------------------------------------
# Request Models
# ---------------------------------------------------------------------------


class DatasetBundle(BaseModel):
    monthlySales: Optional[list[dict[str, Any]]] = None
    productCategories: Optional[list[dict[str, Any]]] = None
    trafficSources: Optional[list[dict[str, Any]]] = None
    customerDemographics: Optional[list[dict[str, Any]]] = None
    marketingCampaigns: Optional[list[dict[str, Any]]] = None


def _run(bundle: DatasetBundle) -> InsightsEngine:
    engine = InsightsEngine(bundle.model_dump(exclude_none=True))
    engine.run_full_analysis()
    return engine


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.post("/insights")
async def analyze(
    bundle: DatasetBundle,
    category: Optional[str] = None,
    limit: Optional[int] = Query(default=None, ge=0),
) -> dict:
    """Run the full analysis and return the prioritized feed.

    ``category`` narrows the feed to one bucket; ``limit`` keeps the top N.
    """
    if category is not None and category not in INSIGHT_CATEGORIES:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown category '{category}'. Expected one of: {', '.join(INSIGHT_CATEGORIES)}",
        )

    engine = _run(bundle)

    if category is not None:
        insights = engine.get_insights_by_category(category)
        if limit is not None:
            insights = insights[:limit]
    elif limit is not None:
        insights = engine.get_top_insights(limit)
    else:
        insights = engine.feed.all()

    return {
        "insights": [i.to_dict() for i in insights],
        "counts": engine.feed.counts(),
        "diagnostics": engine.diagnostics,
    }


@router.post("/insights/report")
async def report(bundle: DatasetBundle, title: str = "Business Insights") -> dict:
    """Run the full analysis and render it as a markdown report."""
    engine = _run(bundle)
    formatted = format_feed_report(engine.feed.all(), title=title, top_n=settings.default_top_n)
    return {
        "title": formatted.title,
        "markdown": formatted.markdown,
        "word_count": formatted.word_count,
        "generated_at": formatted.generated_at,
    }
