"""Seasonality and trend primitives for ordered monthly series.

Deliberately simple heuristics:
- period-over-period growth rates (None where the previous value is zero or the ratio overflows)
- longest streak of periods matching a predicate
- peak detection against a fraction of the series maximum
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Sequence

PEAK_THRESHOLD_RATIO = 0.8


@dataclass
class SeasonalityResult:
    """Peak-threshold seasonality outcome."""
    seasonal: bool
    threshold: float | None
    peak_indices: list[int] = field(default_factory=list)


def growth_rates(values: Sequence[float]) -> list[float | None]:
    """Growth of each value over its predecessor; len(values) - 1 entries.

    A zero predecessor has no defined growth and yields None, as does a
    ratio that overflows to infinity.
    """
    rates: list[float | None] = []
    for prev, curr in zip(values, values[1:]):
        if prev == 0:
            rates.append(None)
            continue
        rate = (curr - prev) / prev
        rates.append(rate if math.isfinite(rate) else None)
    return rates


def longest_streak(values: Sequence, predicate: Callable[[object], bool]) -> int:
    """Length of the longest run of consecutive values satisfying *predicate*."""
    longest = 0
    current = 0
    for v in values:
        if predicate(v):
            current += 1
            longest = max(longest, current)
        else:
            current = 0
    return longest


def longest_decline_streak(rates: Sequence[float | None]) -> int:
    """Longest run of strictly negative growth rates. None breaks a run."""
    return longest_streak(rates, lambda r: r is not None and r < 0)


def detect_peaks(values: Sequence[float], ratio: float = PEAK_THRESHOLD_RATIO) -> SeasonalityResult:
    """Flag values at or above ``ratio * max(values)``.

    Two or more peaks count as a seasonal pattern. A series whose maximum is
    not positive has no meaningful peaks.
    """
    if not values:
        return SeasonalityResult(seasonal=False, threshold=None)

    top = max(values)
    if top <= 0:
        return SeasonalityResult(seasonal=False, threshold=None)

    threshold = top * ratio
    peaks = [i for i, v in enumerate(values) if v >= threshold]
    return SeasonalityResult(
        seasonal=len(peaks) >= 2,
        threshold=threshold,
        peak_indices=peaks,
    )


def month_token(label: str) -> str:
    """'Jan 2025' -> 'Jan'; 'January' -> 'January'."""
    parts = label.split()
    return parts[0] if parts else label
