"""Impact-based ordering.

All orderings here are stable: equal keys keep their input order, which is
the order analyzers ran and emitted.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Callable, Iterable, TypeVar

from commerce_insights.discovery.models import Insight

T = TypeVar("T")


def rank_desc(items: Iterable[T], key: Callable[[T], float | None]) -> list[T]:
    """Sort descending by *key*, dropping items whose key is None.

    ``sorted(..., reverse=True)`` keeps equal elements in input order.
    """
    keyed = [item for item in items if key(item) is not None]
    return sorted(keyed, key=key, reverse=True)


def group_by(records: Iterable[T], attr: str) -> dict[str, list[T]]:
    """Group records by an attribute, keeping first-appearance order."""
    groups: dict[str, list[T]] = defaultdict(list)
    for rec in records:
        groups[getattr(rec, attr)].append(rec)
    return dict(groups)


def prioritize(insights: Iterable[Insight]) -> list[Insight]:
    """Return insights ordered by impact, highest first."""
    return sorted(insights, key=lambda i: i.impact, reverse=True)
