"""Moving-average families computed incrementally over closed bars.

Every family is a subclass of :class:`MovingAverageSeries`. A series owns the
values it has produced so far and appends exactly one value per call to
:meth:`MovingAverageSeries.update`. The output at index ``i`` only depends on
samples ``0..i``, so replaying the same samples through a fresh series (or
through :func:`compute_moving_average`) reproduces the same values.
"""

from __future__ import annotations

import math
from collections import deque
from enum import Enum
from numbers import Integral
from typing import Deque, Dict, Iterable, List, Sequence

from ..errors import ConfigurationError


class MovingAverageFamily(str, Enum):
    """Supported smoothing formulas."""

    SIMPLE = "simple"
    EXPONENTIAL = "exponential"
    ZERO_LAG_EXPONENTIAL = "zero_lag_exponential"
    HULL = "hull"


def _round_period(value: float) -> int:
    # Half-up rounding, clamped to a usable window.
    return max(1, int(math.floor(value + 0.5)))


def _weighted_mean(window: Sequence[float]) -> float:
    """Linearly weighted mean, newest sample weighted ``len(window)``."""

    numerator = 0.0
    for weight, value in enumerate(window, start=1):
        numerator += weight * value
    count = len(window)
    return numerator / (count * (count + 1) / 2.0)


class MovingAverageSeries:
    """Append-only moving-average output for one source series."""

    family: MovingAverageFamily

    def __init__(self, period: int) -> None:
        if isinstance(period, bool) or not isinstance(period, Integral):
            raise ConfigurationError("period must be an integer")
        if period < 1:
            raise ConfigurationError("period must be positive")
        self.period = int(period)
        self.values: List[float] = []

    def update(self, sample: float) -> float:
        """Consume the sample of a newly closed bar and return the new value."""

        value = self._advance(float(sample), commit=True)
        self.values.append(value)
        return value

    def peek(self, sample: float) -> float:
        """Return the value ``update`` would produce without changing state."""

        return self._advance(float(sample), commit=False)

    def extend(self, samples: Iterable[float]) -> List[float]:
        return [self.update(sample) for sample in samples]

    @property
    def latest(self) -> float | None:
        return self.values[-1] if self.values else None

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> float:
        return self.values[index]

    def _advance(self, sample: float, *, commit: bool) -> float:  # pragma: no cover - abstract
        raise NotImplementedError


class SimpleMovingAverage(MovingAverageSeries):
    """Arithmetic mean of the last ``period`` samples."""

    family = MovingAverageFamily.SIMPLE

    def __init__(self, period: int) -> None:
        super().__init__(period)
        self._window: Deque[float] = deque(maxlen=period)

    def _advance(self, sample: float, *, commit: bool) -> float:
        window = self._window if commit else deque(self._window, maxlen=self.period)
        window.append(sample)
        return sum(window) / len(window)


class ExponentialMovingAverage(MovingAverageSeries):
    """EMA seeded with the first sample."""

    family = MovingAverageFamily.EXPONENTIAL

    def __init__(self, period: int) -> None:
        super().__init__(period)
        self.alpha = 2.0 / (period + 1)
        self._previous: float | None = None

    def _smooth(self, value: float) -> float:
        if self._previous is None:
            return value
        return self.alpha * value + (1.0 - self.alpha) * self._previous

    def _advance(self, sample: float, *, commit: bool) -> float:
        value = self._smooth(sample)
        if commit:
            self._previous = value
        return value


class ZeroLagExponentialMovingAverage(ExponentialMovingAverage):
    """EMA of a lag-compensated input ``s[i] + (s[i] - s[i - lag])``."""

    family = MovingAverageFamily.ZERO_LAG_EXPONENTIAL

    def __init__(self, period: int) -> None:
        super().__init__(period)
        self.lag = (period - 1) // 2
        self._samples: Deque[float] = deque(maxlen=self.lag + 1)

    def _compensated(self, sample: float) -> float:
        # Before ``lag`` samples exist the input is used as-is.
        if self.lag == 0 or len(self._samples) < self.lag:
            return sample
        lagged = self._samples[-self.lag]
        return sample + (sample - lagged)

    def _advance(self, sample: float, *, commit: bool) -> float:
        value = self._smooth(self._compensated(sample))
        if commit:
            self._samples.append(sample)
            self._previous = value
        return value


class HullMovingAverage(MovingAverageSeries):
    """``WMA(2 * WMA(s, period/2) - WMA(s, period), sqrt(period))``."""

    family = MovingAverageFamily.HULL

    def __init__(self, period: int) -> None:
        super().__init__(period)
        self.half_period = _round_period(period / 2.0)
        self.smoothing_period = _round_period(math.sqrt(period))
        self._samples: Deque[float] = deque(maxlen=period)
        self._raw: Deque[float] = deque(maxlen=self.smoothing_period)

    def _raw_value(self, samples: Sequence[float]) -> float:
        recent = list(samples)[-self.half_period:]
        return 2.0 * _weighted_mean(recent) - _weighted_mean(samples)

    def _advance(self, sample: float, *, commit: bool) -> float:
        samples = self._samples if commit else deque(self._samples, maxlen=self.period)
        raw = self._raw if commit else deque(self._raw, maxlen=self.smoothing_period)
        samples.append(sample)
        raw.append(self._raw_value(samples))
        return _weighted_mean(raw)


_FAMILIES: Dict[MovingAverageFamily, type[MovingAverageSeries]] = {
    MovingAverageFamily.SIMPLE: SimpleMovingAverage,
    MovingAverageFamily.EXPONENTIAL: ExponentialMovingAverage,
    MovingAverageFamily.ZERO_LAG_EXPONENTIAL: ZeroLagExponentialMovingAverage,
    MovingAverageFamily.HULL: HullMovingAverage,
}


def create_moving_average(family: MovingAverageFamily | str, period: int) -> MovingAverageSeries:
    """Return an empty series of the requested family."""

    try:
        family = MovingAverageFamily(family)
    except ValueError as exc:
        raise ConfigurationError(f"unknown moving average family: {family!r}") from exc
    return _FAMILIES[family](period)


def compute_moving_average(
    samples: Iterable[float],
    period: int,
    family: MovingAverageFamily | str,
) -> List[float]:
    """Recompute a whole series from bar 0."""

    series = create_moving_average(family, period)
    return series.extend(samples)


__all__ = [
    "ExponentialMovingAverage",
    "HullMovingAverage",
    "MovingAverageFamily",
    "MovingAverageSeries",
    "SimpleMovingAverage",
    "ZeroLagExponentialMovingAverage",
    "compute_moving_average",
    "create_moving_average",
]
