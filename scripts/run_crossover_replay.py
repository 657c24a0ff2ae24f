"""CLI entry point for replaying stored bars through a crossover study."""

from __future__ import annotations

import argparse
import json
from datetime import date
from pathlib import Path
from typing import Any, Dict

from macross.config import AppSettings
from macross.data.stores.local import ParquetBarStore
from macross.log import setup_logging
from macross.replay import ReplayConfig, ReplayEngine
from macross.strategies import StrategyConfig, preset_config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "config", type=Path, help="Path to JSON file describing the replay.")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Optional path to write per-bar evaluations as CSV.",
    )
    return parser.parse_args()


def load_config(path: Path, settings: AppSettings) -> tuple[ReplayConfig, StrategyConfig, Path]:
    data: Dict[str, Any] = json.loads(path.read_text())
    store_path = Path(data.get("store_path", settings.data_paths.bars)).expanduser()
    replay = ReplayConfig(
        symbol=data["symbol"],
        start=_parse_date(data.get("start")),
        end=_parse_date(data.get("end")),
        bar_size=data.get("bar_size", "1d"),
        calendar_name=data.get("calendar_name", "XNYS"),
        initial_position=int(data.get("initial_position", 0)),
    )
    overrides: Dict[str, Any] = dict(data.get("overrides", {}))
    # A top-level tick_size wins over one nested in overrides.
    nested_tick_size = overrides.pop("tick_size", None)
    tick_size = data.get("tick_size")
    if tick_size is None:
        tick_size = nested_tick_size
    if tick_size is None:
        tick_size = settings.require_tick_size()
    if "preset" in data:
        strategy = preset_config(data["preset"], float(tick_size), **overrides)
    else:
        strategy = settings.strategy_config(tick_size=float(tick_size), **overrides)
    return replay, strategy, store_path


def _parse_date(value: str | None) -> date | None:
    if value is None:
        return None
    return date.fromisoformat(value)


def main() -> None:
    args = parse_args()
    settings = AppSettings()
    setup_logging(settings.log_level)
    replay, strategy, store_path = load_config(args.config, settings)
    result = ReplayEngine(replay, ParquetBarStore(store_path)).run(strategy)
    frame = result.to_frame()
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(args.output, index=False)
    elif frame.empty:
        print("No bars replayed.")
    else:
        print(frame.to_string(index=False))


if __name__ == "__main__":
    main()
