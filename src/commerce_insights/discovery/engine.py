"""Insights engine orchestrator — runs every domain pass in sequence."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Mapping

from commerce_insights.discovery.campaign_analyzer import analyze_campaigns
from commerce_insights.discovery.category_analyzer import analyze_categories
from commerce_insights.discovery.demographics_analyzer import analyze_demographics
from commerce_insights.discovery.feed_store import InsightFeed
from commerce_insights.discovery.models import Insight, InsightDraft
from commerce_insights.discovery.revenue_analyzer import analyze_revenue
from commerce_insights.discovery.traffic_analyzer import analyze_traffic
from commerce_insights.ingestion.record_normalizer import MalformedFieldError, normalize_records

logger = logging.getLogger(__name__)

# (pass name, bundle key, analyzer). Equal-impact insights keep this order.
PASSES: tuple[tuple[str, str, Callable[[list], list[InsightDraft]]], ...] = (
    ("revenue", "monthlySales", analyze_revenue),
    ("categories", "productCategories", analyze_categories),
    ("traffic", "trafficSources", analyze_traffic),
    ("demographics", "customerDemographics", analyze_demographics),
    ("campaigns", "marketingCampaigns", analyze_campaigns),
)


class _PassTracker:
    """Records per-pass outcomes for run diagnostics."""

    def __init__(self) -> None:
        self._results: list[dict] = []

    def record(
        self,
        name: str,
        *,
        status: str = "ok",
        count: int = 0,
        duration_ms: int = 0,
        error: str | None = None,
        error_type: str | None = None,
    ) -> None:
        self._results.append({
            "pass": name,
            "status": status,
            "count": count,
            "duration_ms": duration_ms,
            "error": error[:500] if error else None,
            "error_type": error_type,
        })

    @property
    def results(self) -> list[dict]:
        return list(self._results)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self._results if r["status"] == "failed")


def _elapsed_ms(t0: float) -> int:
    return int((time.monotonic() - t0) * 1000)


class InsightsEngine:
    """Single-use engine: one bundle, one analysis run, then read-only queries.

    The bundle maps dataset keys (``monthlySales``, ``productCategories``,
    ``trafficSources``, ``customerDemographics``, ``marketingCampaigns``) to
    lists of raw rows. Missing or empty datasets simply produce no insights.
    """

    def __init__(self, bundle: Mapping[str, Any] | None = None) -> None:
        self.data: Mapping[str, Any] = bundle or {}
        self.feed = InsightFeed()
        self._tracker = _PassTracker()

    def run_full_analysis(self) -> list[Insight]:
        """Run every pass, prioritize, and return the ranked feed.

        A failing pass is logged and recorded; the remaining passes still run.
        Calling again returns the existing feed without re-analyzing.
        """
        if self.feed.is_prioritized:
            logger.warning("run_full_analysis called twice on the same engine; returning existing feed")
            return self.feed.all()

        for name, key, analyzer in PASSES:
            self._run_pass(name, key, analyzer)

        self.feed.prioritize()
        logger.info(
            "Insights run complete: %d insights, %d failed pass(es)",
            len(self.feed), self._tracker.failed_count,
        )
        return self.feed.all()

    def _run_pass(self, name: str, key: str, analyzer: Callable[[list], list[InsightDraft]]) -> None:
        rows = self.data.get(key)
        if not rows:
            logger.debug("Insights: no %s data, skipping %s pass", key, name)
            self._tracker.record(name, status="skipped")
            return

        t0 = time.monotonic()
        try:
            records = normalize_records(key, rows)
            drafts = analyzer(records)
        except MalformedFieldError as exc:
            logger.warning("Insights: %s pass skipped, malformed input: %s", name, exc)
            self._tracker.record(
                name, status="failed", duration_ms=_elapsed_ms(t0),
                error=str(exc), error_type="malformed_field",
            )
            return
        except Exception as exc:
            logger.exception("Insights: %s pass failed", name)
            self._tracker.record(
                name, status="failed", duration_ms=_elapsed_ms(t0),
                error=str(exc), error_type="internal_error",
            )
            return

        self.feed.add_all(drafts)
        logger.info("Insights: %s pass produced %d insight(s)", name, len(drafts))
        self._tracker.record(name, count=len(drafts), duration_ms=_elapsed_ms(t0))

    # -- query surface ------------------------------------------------------

    @property
    def diagnostics(self) -> list[dict]:
        return self._tracker.results

    def get_insights_by_category(self, category: str) -> list[Insight]:
        return self.feed.get_insights_by_category(category)

    def get_critical_insights(self) -> list[Insight]:
        return self.feed.get_critical_insights()

    def get_top_insights(self, limit: int = 5) -> list[Insight]:
        return self.feed.get_top_insights(limit)
