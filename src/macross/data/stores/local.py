"""Parquet files of closed bars, one per symbol and bar size."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List

import pandas as pd

from ..schemas import BarDataFrame

_BAR_SIZE_PATTERN = re.compile(r"^(\d+)\s*([a-z]+)$")
_BAR_SIZE_UNITS = {
    "s": "s", "sec": "s", "secs": "s", "second": "s", "seconds": "s",
    "m": "min", "min": "min", "mins": "min", "minute": "min", "minutes": "min",
    "h": "h", "hr": "h", "hour": "h", "hours": "h",
    "d": "d", "day": "d", "days": "d",
    "w": "w", "wk": "w", "week": "w", "weeks": "w",
}
_BAR_SIZE_ALIASES = {"daily": "1d", "hourly": "1h", "weekly": "1w"}


def normalize_bar_size(bar_size: str) -> str:
    """Canonical label for a bar size: ``"5 mins"`` and ``"5m"`` both give ``"5min"``."""

    text = bar_size.strip().lower()
    if text in _BAR_SIZE_ALIASES:
        return _BAR_SIZE_ALIASES[text]
    match = _BAR_SIZE_PATTERN.match(text)
    if match is None or match.group(2) not in _BAR_SIZE_UNITS:
        raise ValueError(f"Unrecognised bar size: {bar_size!r}")
    count = int(match.group(1))
    if count < 1:
        raise ValueError(f"Bar size must be positive: {bar_size!r}")
    return f"{count}{_BAR_SIZE_UNITS[match.group(2)]}"


class ParquetBarStore:
    """Persist OHLCV bars keyed by upper-cased symbol and canonical bar size.

    Saved frames are sorted by timestamp with duplicate timestamps collapsed
    to the last row, so a replay never sees the same bar close twice.
    """

    def __init__(self, root: Path):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def path_for(self, symbol: str, bar_size: str) -> Path:
        symbol = symbol.strip().upper()
        if not symbol:
            raise ValueError("symbol cannot be empty")
        return self.root / f"{symbol}_{normalize_bar_size(bar_size)}.parquet"

    def save(self, symbol: str, bar_size: str, df: pd.DataFrame, *, merge: bool = False) -> Path:
        """Write ``df``; with ``merge`` the stored bars are kept and overlapping
        timestamps take the new values."""

        frame = BarDataFrame.ensure_schema(df)
        path = self.path_for(symbol, bar_size)
        if merge and path.exists():
            existing = BarDataFrame.ensure_schema(pd.read_parquet(path, engine="pyarrow"))
            frame = pd.concat([existing, frame], ignore_index=True)
        frame = (
            frame.sort_values("timestamp", kind="stable")
            .drop_duplicates(subset="timestamp", keep="last")
            .reset_index(drop=True)
        )
        frame.to_parquet(path, engine="pyarrow", index=False)
        return path

    def load(self, symbol: str, bar_size: str) -> pd.DataFrame:
        path = self.path_for(symbol, bar_size)
        if not path.exists():
            raise FileNotFoundError(path)
        return BarDataFrame.ensure_schema(pd.read_parquet(path, engine="pyarrow"))

    def list_symbols(self, bar_size: str = "1d") -> List[str]:
        """Symbols with stored bars of the given size."""

        marker = f"_{normalize_bar_size(bar_size)}"
        return sorted(
            path.stem[: -len(marker)]
            for path in self.root.glob(f"*{marker}.parquet")
            if path.stem.endswith(marker) and len(path.stem) > len(marker)
        )
