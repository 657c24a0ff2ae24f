"""Crossover classification between a fast and a slow series."""

from __future__ import annotations

from enum import Enum
from typing import Sequence


class CrossoverState(str, Enum):
    """Relationship transition between two consecutive bars."""

    NO_CROSS = "no_cross"
    CROSS_FROM_BELOW = "cross_from_below"
    CROSS_FROM_ABOVE = "cross_from_above"


def classify(
    fast_prev: float,
    slow_prev: float,
    fast_cur: float,
    slow_cur: float,
) -> CrossoverState:
    """Classify the transition from bar ``i-1`` to bar ``i``.

    Touching on the previous bar counts as "not above" (or "not below"), so a
    fast line that sat on the slow line and then moves above it is a cross
    from below. Equality on both bars is never a cross.
    """

    if fast_prev <= slow_prev and fast_cur > slow_cur:
        return CrossoverState.CROSS_FROM_BELOW
    if fast_prev >= slow_prev and fast_cur < slow_cur:
        return CrossoverState.CROSS_FROM_ABOVE
    return CrossoverState.NO_CROSS


def detect_crossover(
    fast: Sequence[float],
    slow: Sequence[float],
    index: int | None = None,
) -> CrossoverState:
    """Classify the transition ending at ``index`` (default: the latest bar)."""

    if len(fast) != len(slow):
        raise ValueError(
            f"fast and slow series differ in length ({len(fast)} != {len(slow)})")
    if index is None:
        index = len(fast) - 1
    if index < 1 or index >= len(fast):
        return CrossoverState.NO_CROSS
    return classify(fast[index - 1], slow[index - 1], fast[index], slow[index])


__all__ = ["CrossoverState", "classify", "detect_crossover"]
