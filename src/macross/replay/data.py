"""Bar feed that replays stored bars in chronological order."""

from __future__ import annotations

from datetime import date
from typing import Iterator

import pandas as pd
from exchange_calendars import ExchangeCalendar, get_calendar

from ..data.schemas import BAR_COLUMNS, Bar
from ..data.stores.local import ParquetBarStore


class LocalBarFeed:
    """Load one symbol's bars from the local Parquet store and iterate them.

    With ``calendar_name`` set, bars whose date is not a session of that
    exchange calendar are dropped (weekends, holidays). Pass ``None`` for
    instruments that trade outside a single exchange calendar.
    """

    def __init__(
        self,
        store: ParquetBarStore,
        symbol: str,
        bar_size: str = "1d",
        start: date | None = None,
        end: date | None = None,
        *,
        calendar: ExchangeCalendar | None = None,
        calendar_name: str | None = "XNYS",
    ) -> None:
        self.store = store
        self.symbol = symbol.upper()
        self.bar_size = bar_size
        self.start = start
        self.end = end
        if calendar is None and calendar_name is not None:
            calendar = get_calendar(calendar_name)
        self.calendar = calendar
        self._frame = self._load_frame()

    def _load_frame(self) -> pd.DataFrame:
        frame = self.store.load(self.symbol, self.bar_size).copy()
        frame["timestamp"] = pd.to_datetime(frame["timestamp"], utc=True)
        prices = [column for column in BAR_COLUMNS if column != "timestamp"]
        frame[prices] = frame[prices].astype(float)
        if self.start is not None:
            frame = frame[frame["timestamp"].dt.date >= self.start]
        if self.end is not None:
            frame = frame[frame["timestamp"].dt.date <= self.end]
        frame = frame.sort_values("timestamp").reset_index(drop=True)
        if frame.empty or self.calendar is None:
            return frame
        return frame[self._session_filter(frame["timestamp"])].reset_index(drop=True)

    def _session_filter(self, timestamps: pd.Series) -> pd.Series:
        normalized = timestamps.dt.normalize().dt.tz_localize(None)
        start_label = normalized.min()
        end_label = normalized.max()
        sessions = self.calendar.sessions_in_range(start_label, end_label)
        return normalized.isin(set(sessions))

    def __iter__(self) -> Iterator[Bar]:
        for row in self._frame.to_dict(orient="records"):
            row["timestamp"] = row["timestamp"].to_pydatetime()
            yield Bar(**row)

    def __len__(self) -> int:
        return len(self._frame)
