from datetime import date, datetime, timedelta, timezone

import pytest

from macross.data.schemas import Bar, BarDataFrame
from macross.data.stores.local import ParquetBarStore
from macross.execution import Direction
from macross.replay import LocalBarFeed, ReplayConfig, ReplayEngine
from macross.strategies import preset_config

CLOSES = [100.0, 100.0, 101.0, 102.0, 103.0, 102.0,
          100.0, 98.0, 97.0, 99.0, 102.0, 105.0]


def _build_bars(closes: list[float], start: date) -> list[Bar]:
    rows: list[Bar] = []
    current = start
    for close in closes:
        while current.weekday() >= 5:  # skip weekends
            current += timedelta(days=1)
        rows.append(
            Bar(
                timestamp=datetime(current.year, current.month,
                                   current.day, tzinfo=timezone.utc),
                open=close,
                high=close + 0.5,
                low=close - 0.5,
                close=close,
                volume=1_000,
            )
        )
        current += timedelta(days=1)
    return rows


def _make_store(tmp_path, closes: list[float], start: date) -> ParquetBarStore:
    store = ParquetBarStore(tmp_path / "bars")
    store.save("ES", "1d", BarDataFrame.from_bars(_build_bars(closes, start)))
    return store


def test_replay_reverses_on_each_crossover(tmp_path):
    store = _make_store(tmp_path, CLOSES, start=date(2024, 2, 5))
    config = ReplayConfig(symbol="ES", calendar_name=None)
    strategy_config = preset_config("ema", 0.25, fast_period=1, slow_period=3)

    result = ReplayEngine(config, store).run(strategy_config)

    assert len(result.evaluations) == len(CLOSES)
    entries = [(e.bar_index, e.intent.direction) for e in result.evaluations if e.intent]
    assert entries == [(2, Direction.BUY), (5, Direction.SELL), (9, Direction.BUY)]
    assert [(r.bar_index, r.kind) for r in result.requests] == [
        (2, "submit_entry"),
        (5, "cancel_all_orders"),
        (5, "flatten_position"),
        (5, "submit_entry"),
        (9, "cancel_all_orders"),
        (9, "flatten_position"),
        (9, "submit_entry"),
    ]
    assert result.evaluations[5].position.quantity == 1
    assert result.evaluations[9].position.quantity == -1
    assert result.final_position.quantity == 1
    assert result.signals == 3


def test_replay_frame_reports_bracket_levels(tmp_path):
    store = _make_store(tmp_path, CLOSES, start=date(2024, 2, 5))
    config = ReplayConfig(symbol="ES", calendar_name=None)
    strategy_config = preset_config("ema", 0.25, fast_period=1, slow_period=3,
                                    stop_ticks=8, target_ticks=4)

    frame = ReplayEngine(config, store).run(strategy_config).to_frame()

    assert len(frame) == len(CLOSES)
    buy = frame.iloc[2]
    assert buy["action"] == "enter"
    assert buy["direction"] == "buy"
    assert buy["stop"] == pytest.approx(101.0 - 2.0)
    assert buy["target"] == pytest.approx(101.0 + 1.0)
    sell = frame.iloc[5]
    assert sell["action"] == "flatten_and_enter"
    assert sell["stop"] == pytest.approx(102.0 + 2.0)
    assert frame.iloc[0]["crossover"] == "no_cross"


def test_replay_with_rejections_keeps_position_flat(tmp_path):
    store = _make_store(tmp_path, CLOSES, start=date(2024, 2, 5))
    config = ReplayConfig(symbol="ES", calendar_name=None, reject_entries=True)
    strategy_config = preset_config("ema", 0.25, fast_period=1, slow_period=3)

    result = ReplayEngine(config, store).run(strategy_config)

    assert result.final_position.quantity == 0
    assert all(e.accepted is False for e in result.evaluations if e.intent)
    # Flat on every bar, so no flatten is ever requested.
    assert {r.kind for r in result.requests} == {"submit_entry"}


def test_replay_constant_sma_prices_request_nothing(tmp_path):
    store = _make_store(tmp_path, [100.0] * 20, start=date(2024, 2, 5))
    config = ReplayConfig(symbol="ES", calendar_name=None)

    result = ReplayEngine(config, store).run(preset_config("sma", 0.25))

    assert result.requests == []
    assert result.intents() == []


def test_feed_skips_non_trading_sessions(tmp_path):
    store = ParquetBarStore(tmp_path / "bars")
    bars = _build_bars([100.0, 101.0], start=date(2024, 1, 3))
    weekend = Bar(
        timestamp=datetime(2024, 1, 6, tzinfo=timezone.utc),  # Saturday
        open=104.0,
        high=104.5,
        low=103.5,
        close=104.2,
    )
    store.save("ES", "1d", BarDataFrame.from_bars(bars + [weekend]))

    feed = LocalBarFeed(store, "ES", start=date(2024, 1, 1), end=date(2024, 1, 10))
    timestamps = [bar.timestamp.date() for bar in feed]

    assert timestamps == [date(2024, 1, 3), date(2024, 1, 4)]
    assert len(LocalBarFeed(store, "es", calendar_name=None)) == 3
