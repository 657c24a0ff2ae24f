"""Indicator primitives: moving-average families and crossover detection."""

from .crossover import CrossoverState, classify, detect_crossover
from .moving_average import (
    ExponentialMovingAverage,
    HullMovingAverage,
    MovingAverageFamily,
    MovingAverageSeries,
    SimpleMovingAverage,
    ZeroLagExponentialMovingAverage,
    compute_moving_average,
    create_moving_average,
)

__all__ = [
    "CrossoverState",
    "ExponentialMovingAverage",
    "HullMovingAverage",
    "MovingAverageFamily",
    "MovingAverageSeries",
    "SimpleMovingAverage",
    "ZeroLagExponentialMovingAverage",
    "classify",
    "compute_moving_average",
    "create_moving_average",
    "detect_crossover",
]
