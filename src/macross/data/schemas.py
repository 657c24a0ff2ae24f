"""Bar schemas and input-field selection for the crossover studies."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import ClassVar, Iterable

import pandas as pd
from pydantic import BaseModel, Field

BAR_COLUMNS: tuple[str, ...] = (
    "timestamp",
    "open",
    "high",
    "low",
    "close",
    "volume",
)


class PriceField(str, Enum):
    """Which value of a closed bar feeds a moving average."""

    OPEN = "open"
    HIGH = "high"
    LOW = "low"
    LAST = "last"
    HL_AVG = "hl_avg"
    HLC_AVG = "hlc_avg"
    OHLC_AVG = "ohlc_avg"


class Bar(BaseModel):
    """One closed OHLCV bar."""

    timestamp: datetime = Field(..., description="Bar end timestamp.")
    open: float = Field(..., ge=0)
    high: float = Field(..., ge=0)
    low: float = Field(..., ge=0)
    close: float = Field(..., ge=0)
    volume: float = Field(0.0, ge=0)

    model_config = {
        "populate_by_name": True,
        "frozen": True,
    }

    def value(self, field: PriceField | str) -> float:
        """Return the sample selected by ``field``.

        ``PriceField.LAST`` is the bar's closing (last traded) price.
        """

        field = PriceField(field)
        if field is PriceField.OPEN:
            return self.open
        if field is PriceField.HIGH:
            return self.high
        if field is PriceField.LOW:
            return self.low
        if field is PriceField.LAST:
            return self.close
        if field is PriceField.HL_AVG:
            return (self.high + self.low) / 2.0
        if field is PriceField.HLC_AVG:
            return (self.high + self.low + self.close) / 3.0
        return (self.open + self.high + self.low + self.close) / 4.0

    def to_row(self) -> dict[str, float | datetime]:
        """Return the bar as a dictionary matching :data:`BAR_COLUMNS`."""

        return {
            "timestamp": self.timestamp,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
        }


@dataclass(slots=True)
class BarDataFrame:
    """Helper to construct validated :class:`pandas.DataFrame` objects for bar data."""

    columns: ClassVar[tuple[str, ...]] = BAR_COLUMNS

    @classmethod
    def from_bars(cls, bars: Iterable[Bar]) -> pd.DataFrame:
        """Convert an iterable of bars to a validated DataFrame."""

        df = pd.DataFrame([bar.to_row() for bar in bars], columns=cls.columns)
        if df.empty:
            return df
        df.sort_values("timestamp", inplace=True)
        df.reset_index(drop=True, inplace=True)
        return df

    @classmethod
    def ensure_schema(cls, df: pd.DataFrame) -> pd.DataFrame:
        """Ensure the DataFrame contains the expected columns in correct order."""

        missing = set(cls.columns) - set(df.columns)
        if missing:
            raise ValueError(
                f"DataFrame missing required columns: {sorted(missing)}")
        return df.loc[:, cls.columns].copy()
