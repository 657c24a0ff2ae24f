"""Order intents handed to the execution host."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..strategies.crossover import StrategyConfig


class Direction(str, Enum):
    BUY = "buy"
    SELL = "sell"

    @property
    def sign(self) -> int:
        return 1 if self is Direction.BUY else -1


class OrderKind(str, Enum):
    MARKET = "market"
    LIMIT = "limit"
    TRAILING_STOP = "trailing_stop"


class TimeInForce(str, Enum):
    GOOD_TILL_CANCELED = "gtc"


@dataclass(slots=True, frozen=True)
class OrderIntent:
    """Market entry with an attached stop and target bracket.

    Offsets are price distances from the entry fill, not absolute prices.
    """

    direction: Direction
    quantity: int
    stop_offset: float
    target_offset: float
    order_kind: OrderKind = OrderKind.MARKET
    time_in_force: TimeInForce = TimeInForce.GOOD_TILL_CANCELED
    target_order_kind: OrderKind = OrderKind.LIMIT
    stop_order_kind: OrderKind = OrderKind.TRAILING_STOP
    preceding_flatten: bool = False
    bar_index: int | None = None

    @property
    def signed_quantity(self) -> int:
        return self.direction.sign * self.quantity

    def bracket_prices(self, reference_price: float) -> tuple[float, float]:
        """Return ``(stop, target)`` levels if the entry filled at ``reference_price``."""

        sign = self.direction.sign
        stop = reference_price - sign * self.stop_offset
        target = reference_price + sign * self.target_offset
        return stop, target


def build_order_intent(
    direction: Direction,
    config: "StrategyConfig",
    *,
    preceding_flatten: bool = False,
    bar_index: int | None = None,
) -> OrderIntent:
    """Assemble the bracketed market entry for ``direction`` from ``config``."""

    return OrderIntent(
        direction=Direction(direction),
        quantity=config.order_quantity,
        stop_offset=config.stop_ticks * config.tick_size,
        target_offset=config.target_ticks * config.tick_size,
        preceding_flatten=preceding_flatten,
        bar_index=bar_index,
    )


__all__ = [
    "Direction",
    "OrderIntent",
    "OrderKind",
    "TimeInForce",
    "build_order_intent",
]
