"""Moving-average crossover strategy driven by closed-bar notifications."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from numbers import Integral, Real

from ..data.schemas import Bar, PriceField
from ..errors import ConfigurationError
from ..execution.host import ExecutionHost, PositionSnapshot, PositionState
from ..execution.orders import Direction, OrderIntent, build_order_intent
from ..indicators.crossover import CrossoverState, classify, detect_crossover
from ..indicators.moving_average import (
    MovingAverageFamily,
    MovingAverageSeries,
    create_moving_average,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class StrategyConfig:
    """Configuration for :class:`CrossoverStrategy`.

    ``tick_size`` comes from the host's instrument metadata; stop and target
    distances are expressed in ticks.
    """

    tick_size: float
    family: MovingAverageFamily = MovingAverageFamily.SIMPLE
    fast_period: int = 9
    slow_period: int = 9
    fast_source: PriceField = PriceField.LAST
    slow_source: PriceField = PriceField.LAST
    target_ticks: int = 80
    stop_ticks: int = 80
    order_quantity: int = 1
    max_position: int = 1
    allow_multiple_entries_same_direction: bool = False
    one_trade_per_bar: bool = True

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "family", MovingAverageFamily(self.family))
            object.__setattr__(self, "fast_source", PriceField(self.fast_source))
            object.__setattr__(self, "slow_source", PriceField(self.slow_source))
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc
        self.validate()

    def validate(self) -> None:
        for name in ("fast_period", "slow_period", "target_ticks", "stop_ticks",
                     "order_quantity", "max_position"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Integral):
                raise ConfigurationError(f"{name} must be an integer")
        for name in ("fast_period", "slow_period"):
            if getattr(self, name) < 1:
                raise ConfigurationError(f"{name} must be a positive integer")
        if isinstance(self.tick_size, bool) or not isinstance(self.tick_size, Real):
            raise ConfigurationError("tick_size must be a number")
        if not self.tick_size > 0:
            raise ConfigurationError("tick_size must be positive")
        if self.target_ticks < 0:
            raise ConfigurationError("target_ticks cannot be negative")
        if self.stop_ticks < 0:
            raise ConfigurationError("stop_ticks cannot be negative")
        if self.order_quantity <= 0:
            raise ConfigurationError("order_quantity must be positive")
        if self.max_position <= 0:
            raise ConfigurationError("max_position must be positive")
        if self.order_quantity > self.max_position:
            raise ConfigurationError("order_quantity cannot exceed max_position")
        if not self.one_trade_per_bar:
            raise ConfigurationError(
                "one_trade_per_bar cannot be disabled; each bar close is evaluated once")

    @property
    def stop_offset(self) -> float:
        return self.stop_ticks * self.tick_size

    @property
    def target_offset(self) -> float:
        return self.target_ticks * self.tick_size


class DecisionAction(str, Enum):
    NONE = "none"
    ENTER = "enter"
    FLATTEN_AND_ENTER = "flatten_and_enter"
    SUPPRESSED = "suppressed"


@dataclass(slots=True, frozen=True)
class Decision:
    action: DecisionAction
    direction: Direction | None = None
    reason: str | None = None

    @property
    def flatten_first(self) -> bool:
        return self.action is DecisionAction.FLATTEN_AND_ENTER

    @property
    def submits_entry(self) -> bool:
        return self.action in (DecisionAction.ENTER, DecisionAction.FLATTEN_AND_ENTER)


NO_ACTION = Decision(DecisionAction.NONE)


def decide(
    crossover: CrossoverState,
    position: PositionSnapshot,
    config: StrategyConfig,
) -> Decision:
    """Map a crossover and the host-reported position to an action.

    A cross against an open position flattens before entering the other way.
    A cross in the direction already held is suppressed unless the config
    allows stacking entries and the result stays within ``max_position``.
    """

    if crossover is CrossoverState.NO_CROSS:
        return NO_ACTION

    direction = Direction.BUY if crossover is CrossoverState.CROSS_FROM_BELOW else Direction.SELL
    state = position.state
    opposing = PositionState.SHORT if direction is Direction.BUY else PositionState.LONG
    if state is opposing:
        return Decision(DecisionAction.FLATTEN_AND_ENTER, direction)

    held = position.quantity * direction.sign
    if held > 0:
        if not config.allow_multiple_entries_same_direction:
            return Decision(
                DecisionAction.SUPPRESSED,
                direction,
                reason=f"already {state.value}",
            )
        if held + config.order_quantity > config.max_position:
            return Decision(
                DecisionAction.SUPPRESSED,
                direction,
                reason=f"max position {config.max_position} reached",
            )
    return Decision(DecisionAction.ENTER, direction)


@dataclass(slots=True)
class BarEvaluation:
    """Outcome of one bar-close evaluation."""

    bar_index: int
    fast: float | None = None
    slow: float | None = None
    crossover: CrossoverState = CrossoverState.NO_CROSS
    position: PositionSnapshot | None = None
    decision: Decision = NO_ACTION
    intent: OrderIntent | None = None
    accepted: bool | None = None
    error: str | None = None
    skipped: bool = False


class CrossoverStrategy:
    """Fast/slow moving-average crossover with bracketed market entries.

    The host calls :meth:`on_bar_close` once per closed bar in increasing
    bar order. Position is read from the host on every evaluation and never
    cached between bars.
    """

    def __init__(self, config: StrategyConfig, host: ExecutionHost) -> None:
        config.validate()
        self.config = config
        self.host = host
        self.fast: MovingAverageSeries = create_moving_average(config.family, config.fast_period)
        self.slow: MovingAverageSeries = create_moving_average(config.family, config.slow_period)
        self.last_bar_index: int | None = None

    def on_bar_close(self, bar_index: int, bar: Bar | float) -> BarEvaluation:
        if self.last_bar_index is not None and bar_index <= self.last_bar_index:
            logger.warning(
                "Ignoring bar %s: bars through %s were already evaluated",
                bar_index,
                self.last_bar_index,
            )
            return BarEvaluation(bar_index=bar_index, skipped=True)

        fast_sample, slow_sample = self._samples(bar)
        fast = self.fast.update(fast_sample)
        slow = self.slow.update(slow_sample)
        self.last_bar_index = bar_index
        crossover = detect_crossover(self.fast.values, self.slow.values)
        evaluation = BarEvaluation(bar_index=bar_index, fast=fast, slow=slow, crossover=crossover)

        try:
            position = self.host.get_position()
        except Exception as exc:
            logger.exception("Host failed to report position on bar %s", bar_index)
            evaluation.error = f"{type(exc).__name__}: {exc}"
            return evaluation
        evaluation.position = position

        decision = decide(crossover, position, self.config)
        evaluation.decision = decision
        if decision.action is DecisionAction.SUPPRESSED:
            logger.info(
                "Bar %s: %s %s entry suppressed (%s)",
                bar_index,
                crossover.value,
                decision.direction.value,
                decision.reason,
            )
            return evaluation
        if not decision.submits_entry:
            return evaluation

        intent = build_order_intent(
            decision.direction,
            self.config,
            preceding_flatten=decision.flatten_first,
            bar_index=bar_index,
        )
        evaluation.intent = intent
        logger.info(
            "Bar %s: %s with position %s -> %s entry (flatten first: %s)",
            bar_index,
            crossover.value,
            position.quantity,
            intent.direction.value,
            intent.preceding_flatten,
        )
        try:
            if intent.preceding_flatten:
                self.host.cancel_all_orders()
                self.host.flatten_position()
            evaluation.accepted = bool(self.host.submit_entry(intent))
        except Exception as exc:
            logger.exception("Host failed while handling the %s entry on bar %s",
                             intent.direction.value, bar_index)
            evaluation.error = f"{type(exc).__name__}: {exc}"
            return evaluation

        if not evaluation.accepted:
            logger.warning("Bar %s: host rejected %s entry", bar_index, intent.direction.value)
        return evaluation

    def preview(self, bar: Bar | float) -> tuple[float, float, CrossoverState]:
        """Values and crossover the still-forming bar would produce; no state changes."""

        fast_sample, slow_sample = self._samples(bar)
        fast = self.fast.peek(fast_sample)
        slow = self.slow.peek(slow_sample)
        if not self.fast.values:
            return fast, slow, CrossoverState.NO_CROSS
        return fast, slow, classify(self.fast.latest, self.slow.latest, fast, slow)

    def reset(self) -> None:
        """Drop all series history (handy for repeated replays)."""

        self.fast = create_moving_average(self.config.family, self.config.fast_period)
        self.slow = create_moving_average(self.config.family, self.config.slow_period)
        self.last_bar_index = None

    def _samples(self, bar: Bar | float) -> tuple[float, float]:
        if isinstance(bar, Bar):
            return bar.value(self.config.fast_source), bar.value(self.config.slow_source)
        sample = float(bar)
        return sample, sample


__all__ = [
    "BarEvaluation",
    "CrossoverStrategy",
    "Decision",
    "DecisionAction",
    "StrategyConfig",
    "decide",
]
