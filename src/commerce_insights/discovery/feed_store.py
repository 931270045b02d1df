"""In-memory insight feed: collection, category buckets, prioritization and reads."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable

from commerce_insights.discovery.models import CRITICAL, INSIGHT_CATEGORIES, Insight, InsightDraft
from commerce_insights.discovery.prioritizer import prioritize

logger = logging.getLogger(__name__)


class InsightFeed:
    """Append-only store of one run's insights, indexed by category.

    Lifecycle: empty -> populated by ``add_all`` -> reordered once by
    ``prioritize`` -> read-only.
    """

    def __init__(self) -> None:
        self._insights: list[Insight] = []
        self._by_category: dict[str, list[Insight]] = {c: [] for c in INSIGHT_CATEGORIES}
        self._next_seq = 1
        self._prioritized = False

    # -- collection ---------------------------------------------------------

    def add_all(self, drafts: Iterable[InsightDraft]) -> list[Insight]:
        """Stamp ids on drafts and append them in order."""
        if self._prioritized:
            raise RuntimeError("Insight feed is read-only after prioritization")

        added: list[Insight] = []
        now = datetime.now(timezone.utc)
        for draft in drafts:
            insight = Insight.from_draft(draft, self._new_id(), created_at=now)
            self._insights.append(insight)
            self._by_category[insight.category].append(insight)
            added.append(insight)
        return added

    def _new_id(self) -> str:
        insight_id = f"ins-{self._next_seq:04d}"
        self._next_seq += 1
        return insight_id

    def prioritize(self) -> None:
        """Order the feed and every bucket by impact, highest first."""
        if self._prioritized:
            return
        self._insights = prioritize(self._insights)
        for category, bucket in self._by_category.items():
            self._by_category[category] = prioritize(bucket)
        self._prioritized = True
        logger.debug("Prioritized %d insights", len(self._insights))

    @property
    def is_prioritized(self) -> bool:
        return self._prioritized

    # -- reads --------------------------------------------------------------

    def all(self) -> list[Insight]:
        return list(self._insights)

    def get_insights_by_category(self, category: str) -> list[Insight]:
        """Insights of one category; unknown categories yield an empty list."""
        return list(self._by_category.get(category, []))

    def get_critical_insights(self) -> list[Insight]:
        return self.get_insights_by_category(CRITICAL)

    def get_top_insights(self, limit: int = 5) -> list[Insight]:
        """The first *limit* insights of the feed (fewer if the feed is shorter)."""
        if limit <= 0:
            return []
        return self._insights[:limit]

    def counts(self) -> dict[str, int]:
        return {c: len(bucket) for c, bucket in self._by_category.items()}

    def __len__(self) -> int:
        return len(self._insights)
