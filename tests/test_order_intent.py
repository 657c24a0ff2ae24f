import pytest

from macross.execution import (
    Direction,
    OrderKind,
    TimeInForce,
    build_order_intent,
)
from macross.strategies import StrategyConfig


def test_build_order_intent_converts_ticks_to_offsets():
    config = StrategyConfig(tick_size=0.25, stop_ticks=80, target_ticks=40)

    intent = build_order_intent(Direction.BUY, config)

    assert intent.direction is Direction.BUY
    assert intent.quantity == 1
    assert intent.stop_offset == pytest.approx(20.0)
    assert intent.target_offset == pytest.approx(10.0)
    assert intent.order_kind is OrderKind.MARKET
    assert intent.time_in_force is TimeInForce.GOOD_TILL_CANCELED
    assert intent.target_order_kind is OrderKind.LIMIT
    assert intent.stop_order_kind is OrderKind.TRAILING_STOP
    assert intent.preceding_flatten is False


def test_build_order_intent_is_deterministic():
    config = StrategyConfig(tick_size=0.01)

    first = build_order_intent("sell", config, preceding_flatten=True, bar_index=7)
    second = build_order_intent(Direction.SELL, config, preceding_flatten=True, bar_index=7)

    assert first == second
    assert first.signed_quantity == -1
    assert first.bar_index == 7


def test_zero_ticks_give_zero_offsets():
    config = StrategyConfig(tick_size=0.5, stop_ticks=0, target_ticks=0)

    intent = build_order_intent(Direction.SELL, config)

    assert intent.stop_offset == 0.0
    assert intent.target_offset == 0.0


@pytest.mark.parametrize(
    "direction,expected",
    [
        (Direction.BUY, (4980.0, 5010.0)),
        (Direction.SELL, (5020.0, 4990.0)),
    ],
)
def test_bracket_prices_follow_direction(direction, expected):
    config = StrategyConfig(tick_size=0.25, stop_ticks=80, target_ticks=40)

    intent = build_order_intent(direction, config)

    assert intent.bracket_prices(5000.0) == pytest.approx(expected)


def test_order_quantity_comes_from_config():
    config = StrategyConfig(tick_size=1.0, order_quantity=2, max_position=2)

    assert build_order_intent(Direction.BUY, config).quantity == 2
