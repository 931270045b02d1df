"""Tests for insight value objects."""

from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

import pytest

from commerce_insights.discovery.models import INSIGHT_CATEGORIES, DataPoint, Insight, InsightDraft


def _draft(**overrides) -> InsightDraft:
    kwargs = dict(
        category="opportunity",
        title="t",
        description="d",
        impact=5,
        recommendation="r",
        data_points=[DataPoint("Month", "Jan")],
    )
    kwargs.update(overrides)
    return InsightDraft(**kwargs)


class TestValidation:
    def test_categories_fixed(self):
        assert INSIGHT_CATEGORIES == ("critical", "opportunity", "trend", "performance", "anomaly")

    @pytest.mark.parametrize("impact", [1, 10])
    def test_impact_bounds_accepted(self, impact):
        assert _draft(impact=impact).impact == impact

    @pytest.mark.parametrize("impact", [0, 11, -3])
    def test_impact_out_of_range(self, impact):
        with pytest.raises(ValueError):
            _draft(impact=impact)

    @pytest.mark.parametrize("impact", [7.5, True, "8"])
    def test_impact_must_be_int(self, impact):
        with pytest.raises(ValueError):
            _draft(impact=impact)

    def test_unknown_category(self):
        with pytest.raises(ValueError):
            _draft(category="warning")

    def test_data_points_stored_as_tuple(self):
        assert isinstance(_draft().data_points, tuple)


class TestInsight:
    def test_from_draft(self):
        ts = datetime(2025, 1, 1, tzinfo=timezone.utc)
        ins = Insight.from_draft(_draft(), "ins-0001", created_at=ts)
        assert ins.id == "ins-0001"
        assert ins.category == "opportunity"
        assert ins.created_at == ts
        assert ins.data_points == (DataPoint("Month", "Jan"),)

    def test_immutable(self):
        ins = Insight.from_draft(_draft(), "ins-0001")
        with pytest.raises(FrozenInstanceError):
            ins.impact = 10

    def test_to_dict(self):
        ts = datetime(2025, 1, 1, tzinfo=timezone.utc)
        data = Insight.from_draft(_draft(), "ins-0001", created_at=ts).to_dict()
        assert data == {
            "id": "ins-0001",
            "category": "opportunity",
            "title": "t",
            "description": "d",
            "impact": 5,
            "recommendation": "r",
            "dataPoints": [{"label": "Month", "value": "Jan"}],
            "createdAt": "2025-01-01T00:00:00+00:00",
        }
