"""Replay stored bars through the crossover strategy and a paper host."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List

import pandas as pd

from ..data.schemas import Bar
from ..data.stores.local import ParquetBarStore
from ..execution.host import PositionSnapshot
from ..execution.orders import OrderIntent
from ..execution.paper import HostRequest, PaperExecutionHost
from ..strategies.crossover import BarEvaluation, CrossoverStrategy, StrategyConfig
from .data import LocalBarFeed

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ReplayConfig:
    symbol: str
    start: date | None = None
    end: date | None = None
    bar_size: str = "1d"
    calendar_name: str | None = "XNYS"
    initial_position: int = 0
    reject_entries: bool = False


@dataclass(slots=True)
class ReplayResult:
    bars: List[Bar]
    evaluations: List[BarEvaluation]
    requests: List[HostRequest]
    final_position: PositionSnapshot
    signals: int = 0

    def intents(self) -> List[OrderIntent]:
        return [evaluation.intent for evaluation in self.evaluations if evaluation.intent]

    def to_frame(self) -> pd.DataFrame:
        rows: List[Dict[str, Any]] = []
        for bar, evaluation in zip(self.bars, self.evaluations):
            intent = evaluation.intent
            stop = target = None
            if intent is not None:
                stop, target = intent.bracket_prices(bar.close)
            rows.append(
                {
                    "bar_index": evaluation.bar_index,
                    "timestamp": bar.timestamp,
                    "close": bar.close,
                    "fast": evaluation.fast,
                    "slow": evaluation.slow,
                    "crossover": evaluation.crossover.value,
                    "position": evaluation.position.quantity if evaluation.position else None,
                    "action": evaluation.decision.action.value,
                    "direction": evaluation.decision.direction.value
                    if evaluation.decision.direction else None,
                    "reason": evaluation.decision.reason,
                    "stop": stop,
                    "target": target,
                    "accepted": evaluation.accepted,
                    "error": evaluation.error,
                }
            )
        return pd.DataFrame(rows)


class ReplayEngine:
    """Drive a :class:`CrossoverStrategy` bar by bar against a paper host.

    The host settles after each bar, so a position change requested on bar
    ``i`` is first reported to the strategy on bar ``i + 1``.
    """

    def __init__(self, config: ReplayConfig, store: ParquetBarStore) -> None:
        self.config = config
        self.store = store

    def _build_feed(self) -> LocalBarFeed:
        return LocalBarFeed(
            self.store,
            self.config.symbol,
            bar_size=self.config.bar_size,
            start=self.config.start,
            end=self.config.end,
            calendar_name=self.config.calendar_name,
        )

    def run(self, strategy_config: StrategyConfig) -> ReplayResult:
        return self.run_bars(self._build_feed(), strategy_config)

    def run_bars(self, bars: Iterable[Bar], strategy_config: StrategyConfig) -> ReplayResult:
        host = PaperExecutionHost(
            symbol=self.config.symbol.upper(),
            initial_quantity=self.config.initial_position,
            max_position=strategy_config.max_position,
            reject_entries=self.config.reject_entries,
        )
        strategy = CrossoverStrategy(strategy_config, host)
        replayed: List[Bar] = []
        evaluations: List[BarEvaluation] = []
        signals = 0

        for index, bar in enumerate(bars):
            host.current_bar = index
            evaluation = strategy.on_bar_close(index, bar)
            host.settle()
            replayed.append(bar)
            evaluations.append(evaluation)
            if evaluation.intent is not None:
                signals += 1

        logger.info(
            "Replayed %s bars of %s: %s entries requested, final position %s",
            len(replayed),
            self.config.symbol,
            signals,
            host.quantity,
        )
        return ReplayResult(
            bars=replayed,
            evaluations=evaluations,
            requests=list(host.requests),
            final_position=host.get_position(),
            signals=signals,
        )
