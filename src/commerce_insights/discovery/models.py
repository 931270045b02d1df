"""Insight value objects shared by the analyzers, the feed store and the API."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

CRITICAL = "critical"
OPPORTUNITY = "opportunity"
TREND = "trend"
PERFORMANCE = "performance"
ANOMALY = "anomaly"

INSIGHT_CATEGORIES: tuple[str, ...] = (CRITICAL, OPPORTUNITY, TREND, PERFORMANCE, ANOMALY)

MIN_IMPACT = 1
MAX_IMPACT = 10


def _validate(category: str, impact: int) -> None:
    if category not in INSIGHT_CATEGORIES:
        raise ValueError(f"Unknown insight category: {category!r}")
    if isinstance(impact, bool) or not isinstance(impact, int):
        raise ValueError(f"Impact must be an integer, got {impact!r}")
    if not MIN_IMPACT <= impact <= MAX_IMPACT:
        raise ValueError(f"Impact {impact} outside [{MIN_IMPACT}, {MAX_IMPACT}]")


@dataclass(frozen=True)
class DataPoint:
    """A label/value pair shown next to an insight."""
    label: str
    value: Any

    def to_dict(self) -> dict:
        return {"label": self.label, "value": self.value}


@dataclass(frozen=True)
class InsightDraft:
    """An insight as emitted by an analyzer, before the feed assigns identity."""
    category: str
    title: str
    description: str
    impact: int
    recommendation: str
    data_points: tuple[DataPoint, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        _validate(self.category, self.impact)
        # accept any iterable of points, store as tuple
        object.__setattr__(self, "data_points", tuple(self.data_points))


@dataclass(frozen=True)
class Insight:
    """A scored, human-readable observation with a recommended action."""
    id: str
    category: str
    title: str
    description: str
    impact: int
    recommendation: str
    data_points: tuple[DataPoint, ...] = field(default_factory=tuple)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        _validate(self.category, self.impact)
        object.__setattr__(self, "data_points", tuple(self.data_points))

    @classmethod
    def from_draft(cls, draft: InsightDraft, insight_id: str, created_at: datetime | None = None) -> Insight:
        return cls(
            id=insight_id,
            category=draft.category,
            title=draft.title,
            description=draft.description,
            impact=draft.impact,
            recommendation=draft.recommendation,
            data_points=draft.data_points,
            created_at=created_at or datetime.now(timezone.utc),
        )

    def to_dict(self) -> dict:
        """Wire form consumed by rendering layers."""
        return {
            "id": self.id,
            "category": self.category,
            "title": self.title,
            "description": self.description,
            "impact": self.impact,
            "recommendation": self.recommendation,
            "dataPoints": [dp.to_dict() for dp in self.data_points],
            "createdAt": self.created_at.isoformat(),
        }
