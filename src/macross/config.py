"""Application configuration helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .data.schemas import PriceField
from .errors import ConfigurationError
from .indicators.moving_average import MovingAverageFamily
from .strategies.crossover import StrategyConfig


class DataPaths(BaseModel):
    """Filesystem locations for replayed bar data and reports."""

    bars: Path = Field(default=Path("data/bars"))
    reports: Path = Field(default=Path("data/reports"))

    def ensure(self) -> None:
        """Create directories if they do not exist."""

        for path in (self.bars, self.reports):
            path.mkdir(parents=True, exist_ok=True)


class AppSettings(BaseSettings):
    """Project-wide settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
    )

    family: MovingAverageFamily = Field(
        default=MovingAverageFamily.SIMPLE, alias="MACROSS_FAMILY")
    fast_period: int = Field(default=9, alias="MACROSS_FAST_PERIOD")
    slow_period: int = Field(default=9, alias="MACROSS_SLOW_PERIOD")
    fast_source: PriceField = Field(
        default=PriceField.LAST, alias="MACROSS_FAST_SOURCE")
    slow_source: PriceField = Field(
        default=PriceField.LAST, alias="MACROSS_SLOW_SOURCE")
    stop_ticks: int = Field(default=80, alias="MACROSS_STOP_TICKS")
    target_ticks: int = Field(default=80, alias="MACROSS_TARGET_TICKS")
    tick_size: float | None = Field(default=None, alias="MACROSS_TICK_SIZE")
    log_level: str = Field(default="INFO", alias="MACROSS_LOG_LEVEL")
    data_paths: DataPaths = Field(default_factory=DataPaths)

    def require_tick_size(self) -> float:
        """Return the configured tick size or raise a helpful error."""

        if self.tick_size is None:
            raise ConfigurationError(
                "Missing tick size. Set MACROSS_TICK_SIZE in your environment or .env file, "
                "or pass the instrument tick size explicitly."
            )
        return self.tick_size

    def strategy_config(self, **overrides: Any) -> StrategyConfig:
        """Build a validated :class:`StrategyConfig`; ``overrides`` win over settings."""

        params: dict[str, Any] = dict(
            family=self.family,
            fast_period=self.fast_period,
            slow_period=self.slow_period,
            fast_source=self.fast_source,
            slow_source=self.slow_source,
            stop_ticks=self.stop_ticks,
            target_ticks=self.target_ticks,
        )
        params.update(overrides)
        if params.get("tick_size") is None:
            params["tick_size"] = self.require_tick_size()
        return StrategyConfig(**params)
